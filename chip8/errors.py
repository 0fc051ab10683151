class Chip8Error(Exception):
    """Base class for everything the emulator raises."""


class RomError(Chip8Error):
    """ROM file missing, unreadable or too large for program memory."""


class Chip8Fault(Chip8Error):
    """Fatal machine fault; the run loop must stop.

    The engine fills in ``address`` (pc of the faulting instruction),
    ``opcode`` and its ``mnemonic`` before the fault leaves ``Chip8.cycle``.
    """

    def __init__(self, message, address=None, opcode=None, mnemonic=None):
        super().__init__(message)
        self.message = message
        self.address = address
        self.opcode = opcode
        self.mnemonic = mnemonic

    def locate(self, address, opcode, mnemonic=None):
        if self.address is None:
            self.address = address
        if self.opcode is None:
            self.opcode = opcode
        if self.mnemonic is None:
            self.mnemonic = mnemonic

    def __str__(self):
        where = []
        if self.address is not None:
            where.append("pc=0x%03X" % self.address)
        if self.opcode is not None:
            where.append("opcode=%04X" % self.opcode)
        if self.mnemonic is not None:
            where.append(self.mnemonic)
        if where:
            return "%s (%s)" % (self.message, ", ".join(where))
        return self.message


class StackOverflow(Chip8Fault):
    pass


class StackUnderflow(Chip8Fault):
    pass


class MemoryFault(Chip8Fault):
    """Memory access outside 0x000-0xFFF."""


class RegisterFault(Chip8Fault):
    """General register index outside V0-VF."""


class KeyIndexError(Chip8Fault):
    """Keypad index outside 0x0-0xF."""
