# CHIP8 Virtual Machine:
# Input - key states are latched by the host and checked per cycle.
# Output - 64x32 display (pixels on or off) & a buzzer event when the sound timer runs out.
# CPU - Cowgod's CHIP8 Technical reference http://devernay.free.fr/hacks/chip8/C8TECH10.HTM#0.0
# Memory - 4096 bytes which hold the font and the loaded ROM.
#----------------------------------------------------------------------------------------------
# One call to cycle() fetches, decodes and executes exactly one instruction and then steps the
# timers. The machine never loops on its own: the host decides how often to call cycle(), reads
# the display and writes the keypad in between.

import random
from enum import Enum

import pyglet

from .config import GLYPH_SIZE
from .display import Display
from .errors import Chip8Fault
from .instructions import Op, decode
from .keypad import Keypad
from .log import log, warn
from .memory import Memory
from .registers import Registers
from .rom import read_rom
from .stack import Stack
from .timers import Timers


class RunState(Enum):
    RUNNING = "running"
    AWAITING_KEY = "awaiting_key"  # blocked in Fx0A until a key is pressed


class Chip8(pyglet.event.EventDispatcher):
    """The CHIP-8 machine: memory, registers, stack, timers, display and keypad.

    Events:
        on_buzzer() - the sound timer stepped from 1 to 0.
    """

    def __init__(self, seed=None):
        # ---- CPU state ----
        self.memory = Memory()
        self.V = Registers()
        self.stack = Stack()
        self.timers = Timers()
        self.display = Display()
        self.keypad = Keypad()

        self.rng = random.Random(seed)
        self.state = RunState.RUNNING
        self.waiting_register = None
        self.instruction = None  # last decoded instruction
        self.cycle_count = 0

        # Prepare opcode function map
        self.setup_funcmap()

    # ---- Register shortcuts ----
    @property
    def pc(self):
        return self.V.pc

    @pc.setter
    def pc(self, value):
        self.V.pc = value

    @property
    def I(self):
        return self.V.I

    @I.setter
    def I(self, value):
        self.V.I = value

    # ---- Host interface ----
    def load_rom(self, path):
        log("Loading ROM:", path)
        self.load_program(read_rom(path))

    def load_program(self, rom):
        self.memory.load_program(bytes(rom))

    def set_key(self, key, pressed):
        self.keypad.set_key(key, pressed)

    def reset(self):
        """Back to power-on state; memory (font and program) is kept."""
        self.V.reset()
        self.stack.reset()
        self.timers.reset()
        self.display.reset()
        self.keypad.reset()
        self.state = RunState.RUNNING
        self.waiting_register = None
        self.instruction = None
        self.cycle_count = 0

    def run(self, cycles):
        """Run up to ``cycles`` cycles; returns how many completed."""
        completed = 0
        for _ in range(cycles):
            if self.cycle():
                completed += 1
        return completed

    # ---- Cycle ----
    def cycle(self):
        """Run one cycle. Returns False if the instruction did not complete.

        An incomplete cycle (Fx0A with no key pressed) leaves pc on the
        waiting instruction and does not step the timers.
        """
        self.cycle_count += 1
        address = self.pc
        opcode = None
        try:
            if self.state is RunState.AWAITING_KEY:
                opcode = self.instruction.raw
                completed = self._resume_key_wait()
            else:
                # Fetch opcode, pc moves past it before execution
                opcode = self.memory.read_word(address)
                self.pc = address + 2
                self.instruction = decode(opcode)
                log("0x%03X: %04X  %s" % (address, opcode, self.instruction))
                completed = self.execute(self.instruction)
        except Chip8Fault as fault:
            mnemonic = decode(opcode).mnemonic() if opcode is not None else None
            fault.locate(address, opcode, mnemonic)
            raise

        if completed:
            self._step_timers()
        return completed

    run_cycle = cycle

    def execute(self, instruction):
        handler = self.funcmap.get(instruction.op)
        if handler is None:
            if instruction.op is Op.SYS:
                warn("Opcode %04X (SYS) at 0x%03X not implemented."
                     % (instruction.raw, self.pc - 2))
            else:
                warn("Unknown opcode: %04X at 0x%03X" % (instruction.raw, self.pc - 2))
            return True
        return handler(instruction) is not False

    def _step_timers(self):
        if self.timers.tick():
            log("Sound plays!")
            self.dispatch_event('on_buzzer')

    def _resume_key_wait(self):
        key = self.keypad.first_pressed()
        if key is None:
            return False
        self.V[self.waiting_register] = key
        log("Key 0x%X pressed, stored in V%X" % (key, self.waiting_register))
        self.state = RunState.RUNNING
        self.waiting_register = None
        self.pc += 2
        return True

    # ---- Opcode function map ----
    def setup_funcmap(self):
        self.funcmap = {
            Op.CLS: self.op_CLS,              # 00E0 - Clear the display
            Op.RET: self.op_RET,              # 00EE - Return from a subroutine
            Op.JP: self.op_JP,                # 1nnn - Jump to address nnn
            Op.CALL: self.op_CALL,            # 2nnn - Call subroutine at nnn
            Op.SE_VX_NN: self.op_SE_Vx_kk,    # 3xkk - Skip if Vx == kk
            Op.SNE_VX_NN: self.op_SNE_Vx_kk,  # 4xkk - Skip if Vx != kk
            Op.SE_VX_VY: self.op_SE_Vx_Vy,    # 5xy0 - Skip if Vx == Vy
            Op.LD_VX_NN: self.op_LD_Vx_kk,    # 6xkk - Vx = kk
            Op.ADD_VX_NN: self.op_ADD_Vx_kk,  # 7xkk - Vx += kk
            Op.LD_VX_VY: self.op_LD_Vx_Vy,    # 8xy0 - Vx = Vy
            Op.OR: self.op_OR,                # 8xy1 - Vx |= Vy
            Op.AND: self.op_AND,              # 8xy2 - Vx &= Vy
            Op.XOR: self.op_XOR,              # 8xy3 - Vx ^= Vy
            Op.ADD_VX_VY: self.op_ADD,        # 8xy4 - Vx += Vy, VF = carry
            Op.SUB: self.op_SUB,              # 8xy5 - Vx -= Vy, VF = NOT borrow
            Op.SHR: self.op_SHR,              # 8xy6 - Vx >>= 1, VF = old bit 0
            Op.SUBN: self.op_SUBN,            # 8xy7 - Vx = Vy - Vx, VF = NOT borrow
            Op.SHL: self.op_SHL,              # 8xyE - Vx <<= 1, VF = old bit 7
            Op.SNE_VX_VY: self.op_SNE_Vx_Vy,  # 9xy0 - Skip if Vx != Vy
            Op.LD_I: self.op_LD_I,            # Annn - I = nnn
            Op.JP_V0: self.op_JP_V0,          # Bnnn - Jump to nnn + V0
            Op.RND: self.op_RND,              # Cxkk - Vx = random byte & kk
            Op.DRW: self.op_DRW,              # Dxyn - Draw sprite, VF = collision
            Op.SKP: self.op_SKP,              # Ex9E - Skip if key Vx pressed
            Op.SKNP: self.op_SKNP,            # ExA1 - Skip if key Vx not pressed
            Op.LD_VX_DT: self.op_LD_Vx_DT,    # Fx07 - Vx = delay timer
            Op.LD_VX_K: self.op_WAITKEY,      # Fx0A - Wait for a key, store it in Vx
            Op.LD_DT_VX: self.op_LD_DT_Vx,    # Fx15 - delay timer = Vx
            Op.LD_ST_VX: self.op_LD_ST_Vx,    # Fx18 - sound timer = Vx
            Op.ADD_I_VX: self.op_ADD_I_Vx,    # Fx1E - I += Vx, VF = overflow past 0xFFF
            Op.LD_F_VX: self.op_FONT,         # Fx29 - I = glyph address of Vx
            Op.LD_B_VX: self.op_BCD,          # Fx33 - BCD of Vx at I, I+1, I+2
            Op.LD_MEM_VX: self.op_STORE,      # Fx55 - Store V0..Vx at I, I += x + 1
            Op.LD_VX_MEM: self.op_LOAD,       # Fx65 - Load V0..Vx from I, I += x + 1
        }

    # ---- Opcode Handlers ----
    def op_CLS(self, ins):
        self.display.clear()
        log("Clear the display (all pixels turned off)")

    def op_RET(self, ins):
        self.pc = self.stack.pop()
        log("Return to", hex(self.pc))

    def op_JP(self, ins):
        self.pc = ins.nnn

    def op_CALL(self, ins):
        self.stack.push(self.pc)
        self.pc = ins.nnn
        log("Call subroutine at", hex(ins.nnn))

    def op_SE_Vx_kk(self, ins):
        if self.V[ins.x] == ins.nn:
            self.pc += 2

    def op_SNE_Vx_kk(self, ins):
        if self.V[ins.x] != ins.nn:
            self.pc += 2

    def op_SE_Vx_Vy(self, ins):
        if self.V[ins.x] == self.V[ins.y]:
            self.pc += 2

    def op_LD_Vx_kk(self, ins):
        self.V[ins.x] = ins.nn

    def op_ADD_Vx_kk(self, ins):
        self.V[ins.x] = self.V[ins.x] + ins.nn

    def op_LD_Vx_Vy(self, ins):
        self.V[ins.x] = self.V[ins.y]

    def op_OR(self, ins):
        self.V[ins.x] = self.V[ins.x] | self.V[ins.y]

    def op_AND(self, ins):
        self.V[ins.x] = self.V[ins.x] & self.V[ins.y]

    def op_XOR(self, ins):
        self.V[ins.x] = self.V[ins.x] ^ self.V[ins.y]

    # The flag is written before the result, so with x == F the result wins.
    def op_ADD(self, ins):
        vx, vy = self.V[ins.x], self.V[ins.y]
        self.V.vf = 1 if vy > 0xFF - vx else 0
        self.V[ins.x] = vx + vy
        log(f"Add V{ins.y:X} to V{ins.x:X}: result {self.V[ins.x]}, carry={self.V.vf}")

    def op_SUB(self, ins):
        vx, vy = self.V[ins.x], self.V[ins.y]
        self.V.vf = 0 if vx < vy else 1
        self.V[ins.x] = vx - vy
        log(f"Subtract V{ins.y:X} from V{ins.x:X}: result {self.V[ins.x]}, NOT borrow={self.V.vf}")

    def op_SHR(self, ins):
        vx = self.V[ins.x]
        self.V.vf = vx & 0x01
        self.V[ins.x] = vx >> 1

    def op_SUBN(self, ins):
        vx, vy = self.V[ins.x], self.V[ins.y]
        self.V.vf = 0 if vx > vy else 1
        self.V[ins.x] = vy - vx
        log(f"Set V{ins.x:X} = V{ins.y:X} - V{ins.x:X}: result {self.V[ins.x]}, NOT borrow={self.V.vf}")

    def op_SHL(self, ins):
        vx = self.V[ins.x]
        self.V.vf = vx >> 7
        self.V[ins.x] = vx << 1

    def op_SNE_Vx_Vy(self, ins):
        if self.V[ins.x] != self.V[ins.y]:
            self.pc += 2

    def op_LD_I(self, ins):
        self.I = ins.nnn

    def op_JP_V0(self, ins):
        self.pc = ins.nnn + self.V[0]

    def op_RND(self, ins):
        self.V[ins.x] = self.rng.getrandbits(8) & ins.nn

    def op_DRW(self, ins):
        x = self.V[ins.x]
        y = self.V[ins.y]
        sprite = self.memory.read_block(self.I, ins.n)
        collision = self.display.draw_sprite(x, y, sprite)
        self.V.vf = 1 if collision else 0
        log(f"Drew sprite, collision={self.V.vf}")

    def op_SKP(self, ins):
        if self.keypad.is_pressed(self.V[ins.x]):
            self.pc += 2

    def op_SKNP(self, ins):
        if not self.keypad.is_pressed(self.V[ins.x]):
            self.pc += 2

    def op_LD_Vx_DT(self, ins):
        self.V[ins.x] = self.timers.delay

    def op_WAITKEY(self, ins):
        key = self.keypad.first_pressed()
        if key is None:
            # stall: pc stays on this instruction until a key arrives
            self.state = RunState.AWAITING_KEY
            self.waiting_register = ins.x
            self.pc -= 2
            log(f"Waiting for key into V{ins.x:X}")
            return False
        self.V[ins.x] = key

    def op_LD_DT_Vx(self, ins):
        self.timers.delay = self.V[ins.x]

    def op_LD_ST_Vx(self, ins):
        self.timers.sound = self.V[ins.x]

    def op_ADD_I_Vx(self, ins):
        total = self.I + self.V[ins.x]
        self.V.vf = 1 if total > 0xFFF else 0
        self.I = total & 0xFFFF

    def op_FONT(self, ins):
        self.I = self.V[ins.x] * GLYPH_SIZE

    def op_BCD(self, ins):
        v = self.V[ins.x]
        self.memory.write_block(self.I, [v // 100, (v // 10) % 10, v % 10])

    def op_STORE(self, ins):
        self.memory.write_block(self.I, [self.V[i] for i in range(ins.x + 1)])
        self.I += ins.x + 1

    def op_LOAD(self, ins):
        for i, value in enumerate(self.memory.read_block(self.I, ins.x + 1)):
            self.V[i] = value
        self.I += ins.x + 1


Chip8.register_event_type('on_buzzer')
