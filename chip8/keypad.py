import numpy as np

from .config import KEY_COUNT
from .errors import KeyIndexError


class Keypad:
    """16-key hex keypad latch. The host writes it, the CPU only reads it.

    Keypad    >>>   Index
    1 2 3 c   >>>   0x1 0x2 0x3 0xC
    4 5 6 d   >>>   0x4 0x5 0x6 0xD
    7 8 9 e   >>>   0x7 0x8 0x9 0xE
    a 0 b f   >>>   0xA 0x0 0xB 0xF
    """

    def __init__(self):
        self.keys = np.zeros(KEY_COUNT, dtype=bool)

    def _check(self, key):
        if not 0 <= key < KEY_COUNT:
            raise KeyIndexError("Key index out of range: %r" % (key,))

    def set_key(self, key, pressed):
        self._check(key)
        self.keys[key] = bool(pressed)

    def press(self, key):
        self.set_key(key, True)

    def release(self, key):
        self.set_key(key, False)

    def is_pressed(self, key):
        self._check(key)
        return bool(self.keys[key])

    def first_pressed(self):
        """Lowest pressed key index, or None."""
        pressed = np.flatnonzero(self.keys)
        if pressed.size == 0:
            return None
        return int(pressed[0])

    def reset(self):
        self.keys[:] = False
