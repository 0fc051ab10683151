from .config import REGISTER_COUNT, PROGRAM_START
from .errors import RegisterFault


class Registers:
    """V0-VF (8 bit, VF doubles as the flag), I and pc (16 bit).

    Writes to V registers are truncated to 8 bits. I and pc are stored as
    given; memory access through them is bounds-checked by Memory.
    """

    def __init__(self):
        self.values = [0] * REGISTER_COUNT
        self.I = 0
        self.pc = PROGRAM_START

    def _check(self, index):
        if not 0 <= index < REGISTER_COUNT:
            raise RegisterFault("Register index out of range: %r" % (index,))

    def __getitem__(self, index):
        self._check(index)
        return self.values[index]

    def __setitem__(self, index, value):
        self._check(index)
        self.values[index] = value & 0xFF

    @property
    def vf(self):
        return self.values[0xF]

    @vf.setter
    def vf(self, value):
        self.values[0xF] = value & 0xFF

    def reset(self):
        self.values = [0] * REGISTER_COUNT
        self.I = 0
        self.pc = PROGRAM_START
