import numpy as np
import pytest

from chip8.config import FONTSET, MAX_ROM_SIZE, PROGRAM_START
from chip8.display import Display
from chip8.errors import (KeyIndexError, MemoryFault, RegisterFault, RomError,
                          StackOverflow, StackUnderflow)
from chip8.keypad import Keypad
from chip8.memory import Memory
from chip8.registers import Registers
from chip8.stack import Stack
from chip8.timers import Timers


# ---- Memory ----

def test_font_loaded_at_zero():
    memory = Memory()
    assert memory.read_block(0, 80) == bytes(FONTSET)
    assert memory.read(80) == 0


def test_memory_bounds():
    memory = Memory()
    memory.write(0xFFF, 0x1AB)
    assert memory.read(0xFFF) == 0xAB
    with pytest.raises(MemoryFault):
        memory.read(0x1000)
    with pytest.raises(MemoryFault):
        memory.write(-1, 0)
    with pytest.raises(MemoryFault):
        memory.read_word(0xFFF)
    with pytest.raises(MemoryFault):
        memory.write_block(0xFFE, [1, 2, 3])
    # nothing written by the failed block write
    assert memory.read(0xFFE) == 0


def test_load_program_limits():
    memory = Memory()
    memory.load_program(b"\x01" * MAX_ROM_SIZE)
    assert memory.read(PROGRAM_START) == 1
    assert memory.read(0xFFF) == 1
    assert memory.read_block(0, 80) == bytes(FONTSET)
    with pytest.raises(RomError):
        Memory().load_program(b"\x00" * (MAX_ROM_SIZE + 1))


# ---- Registers ----

def test_register_writes_wrap_to_8_bits():
    regs = Registers()
    regs[3] = 0x1FF
    assert regs[3] == 0xFF
    regs[3] = 256
    assert regs[3] == 0
    regs[0xF] = 7
    assert regs.vf == 7
    regs.vf = 0x101
    assert regs[0xF] == 1


def test_register_index_checked():
    regs = Registers()
    with pytest.raises(RegisterFault):
        regs[16]
    with pytest.raises(RegisterFault):
        regs[-1] = 0


def test_index_and_pc_are_not_masked():
    regs = Registers()
    assert regs.pc == 0x200
    regs.I = 0x1234
    assert regs.I == 0x1234


# ---- Stack ----

def test_stack_is_lifo_and_bounded():
    stack = Stack()
    for address in range(0x200, 0x220, 2):
        stack.push(address)
    assert len(stack) == 16
    with pytest.raises(StackOverflow):
        stack.push(0x300)
    assert stack.peek() == 0x21E
    assert stack.pop() == 0x21E
    assert len(stack) == 15


def test_stack_underflow():
    stack = Stack()
    assert stack.peek() is None
    with pytest.raises(StackUnderflow):
        stack.pop()


# ---- Timers ----

def test_timers_stop_at_zero():
    timers = Timers()
    timers.delay = 2
    timers.tick()
    timers.tick()
    timers.tick()
    assert timers.delay == 0


def test_buzzer_fires_once_on_transition():
    timers = Timers()
    timers.sound = 2
    assert timers.tick() is False
    assert timers.tick() is True
    assert timers.tick() is False
    assert timers.sound == 0


# ---- Display ----

def test_display_is_row_major():
    display = Display()
    display.draw_sprite(5, 2, [0x80])
    assert display.vram[5 + 2 * 64]
    assert display.pixel(5, 2)
    assert display.vram.sum() == 1


def test_draw_xor_and_collision():
    display = Display()
    assert display.draw_sprite(0, 0, [0xF0]) is False
    assert display.draw_sprite(2, 0, [0xF0]) is True
    row = display.pixels[0, :8]
    assert list(row) == [True, True, False, False, True, True, False, False]


def test_draw_clips_right_and_bottom_edges():
    display = Display()
    display.draw_sprite(60, 30, [0xFF, 0xFF, 0xFF])
    assert display.pixels[30:, 60:].all()
    assert display.vram.sum() == 8
    # nothing wrapped to the left column or the top row
    assert not display.pixels[:, :8].any()
    assert not display.pixels[:30].any()


def test_draw_origin_wraps():
    display = Display()
    display.draw_sprite(64 + 3, 32 + 1, [0x80])
    assert display.pixel(3, 1)


def test_changed_flag_consumed_once():
    display = Display()
    assert display.consume() is True
    assert display.consume() is False
    display.clear()
    assert display.consume() is True
    display.draw_sprite(0, 0, [])
    assert display.should_draw


def test_gfx_is_a_copy():
    display = Display()
    frame = display.gfx()
    frame[0] = True
    assert not display.vram[0]
    assert frame.shape == (2048,)


# ---- Keypad ----

def test_keypad_latch():
    keypad = Keypad()
    assert keypad.first_pressed() is None
    keypad.press(0xB)
    keypad.press(0x4)
    assert keypad.first_pressed() == 0x4
    keypad.release(0x4)
    assert keypad.first_pressed() == 0xB
    assert keypad.is_pressed(0xB)
    assert not keypad.is_pressed(0x4)
    assert keypad.keys.dtype == np.bool_


def test_keypad_index_checked():
    keypad = Keypad()
    with pytest.raises(KeyIndexError):
        keypad.set_key(16, True)
    with pytest.raises(KeyIndexError):
        keypad.is_pressed(-1)


def test_stack_depth_tracks_pushes():
    stack = Stack()
    assert stack.depth == 0
    stack.push(0x200)
    stack.push(0x202)
    assert stack.depth == 2
    stack.pop()
    assert stack.depth == 1


def test_display_rows_is_a_top_down_view():
    display = Display()
    display.draw_sprite(3, 0, [0x80])
    rows = display.rows()
    assert rows.shape == (32, 64)
    assert rows[0, 3]
    rows[31, 63] = True
    assert display.pixel(63, 31)


def test_registers_values_list():
    regs = Registers()
    regs[2] = 0x1AA
    assert regs.values[2] == 0xAA
    assert len(regs.values) == 16


# ---- Logging ----

def test_beep_shown_with_logging_off(capsys):
    from chip8 import log

    log.set_logging(False)
    log.log("hidden")
    log.beep()
    out = capsys.readouterr().out
    assert "hidden" not in out
    assert "BEEP!" in out
