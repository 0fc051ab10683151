# Host side of the emulator: pyglet handles the window, keyboard and the
# clock. The machine itself knows nothing about any of it; this window owns
# one Chip8, calls cycle() on a schedule, renders the display when it changed
# and latches key presses into the keypad.

import numpy as np
import pyglet
from pyglet.window import key

from .config import CPU_HZ, KEYMAP, height, scale, width, window_height, window_width
from .errors import Chip8Fault
from .log import beep, toggle_logging, warn

#map binding keys
keymap = {getattr(key, name): index for name, index in KEYMAP.items()}


def _hud_label(text, line):
    """White overlay text in the top-left corner, one line per ``line``."""
    return pyglet.text.Label(text, font_size=12, x=5, y=window_height - 15 * (line + 1),
                             anchor_x='left', anchor_y='center',
                             color=(255, 255, 255, 255))


class Chip8Window(pyglet.window.Window):

    def __init__(self, machine, romname=""):
        super().__init__(
            width=window_width,
            height=window_height,
            caption="CHIP-8 Emulator - %s" % romname if romname else "CHIP-8 Emulator",
            vsync=False
        )
        self.machine = machine
        self.machine.push_handlers(on_buzzer=self.on_buzzer)
        self.has_exit = False

        # Pre-allocated small framebuffer (64x32 RGBA), upscaled with numpy.repeat
        self._small_framebuf = np.zeros((height, width, 4), dtype=np.uint8)
        self._small_framebuf[..., 3] = 255
        self.image = pyglet.image.ImageData(
            window_width,
            window_height,
            'RGBA',
            np.zeros((window_height, window_width, 4), dtype=np.uint8).tobytes()
        )

        # Performance tracking counters
        self._fps_counter = 0
        self._cps_counter = 0
        self._bench_time = pyglet.clock.get_default().time()
        self.fps_label = _hud_label("FPS: 0", line=0)
        self.cps_label = _hud_label("Cycles/s: 0", line=1)

        # Schedule the loops
        pyglet.clock.schedule_interval(self.tick, 1 / CPU_HZ)
        pyglet.clock.schedule(self.draw_frame)
        pyglet.clock.schedule_interval(self._update_bench, 1.0)

    # FPS / CPS
    def _update_bench(self, dt):
        now = pyglet.clock.get_default().time()
        elapsed = now - self._bench_time
        if elapsed >= 1.0:
            self.fps_label.text = f"FPS: {self._fps_counter / elapsed:.1f}"
            self.cps_label.text = f"Cycles/s: {self._cps_counter}"
            self._fps_counter = 0
            self._cps_counter = 0
            self._bench_time = now

    # CPU tick
    def tick(self, dt):
        if self.has_exit:
            return
        self._cps_counter += 1
        try:
            self.machine.cycle()
        except Chip8Fault as e:
            warn("Emulation error:", e)
            self.stop()

    def stop(self):
        self.has_exit = True
        pyglet.clock.unschedule(self.tick)
        pyglet.clock.unschedule(self.draw_frame)
        pyglet.clock.unschedule(self._update_bench)
        self.close()

    # draw loop
    def draw_frame(self, dt):
        if self.machine.display.should_draw:
            self.dispatch_event('on_draw')

    def on_draw(self):
        if not self.machine.display.consume():
            return

        self.clear()
        # pyglet's origin is bottom-left, the CHIP-8 screen starts top-left
        lit = np.flipud(self.machine.display.rows())
        self._small_framebuf[..., :3] = lit[..., None] * np.uint8(255)

        if scale != 1:
            scaled = np.repeat(np.repeat(self._small_framebuf, scale, axis=0), scale, axis=1)
        else:
            scaled = self._small_framebuf

        #updates existing image without creating new object
        self.image.set_data('RGBA', window_width * 4, scaled.tobytes())
        self.image.blit(0, 0)

        self.fps_label.draw()
        self.cps_label.draw()
        self._fps_counter += 1

    # keyboard
    def on_key_press(self, symbol, modifiers):
        if symbol == key.ESCAPE:
            self.stop()
            return pyglet.event.EVENT_HANDLED
        if symbol == key.F1:
            toggle_logging()
        if symbol in keymap:
            self.machine.set_key(keymap[symbol], True)

    def on_key_release(self, symbol, modifiers):
        if symbol in keymap:
            self.machine.set_key(keymap[symbol], False)

    # sound (no synthesis, the buzzer is only reported)
    def on_buzzer(self):
        beep()

    def on_close(self):
        self.stop()
