from .config import FONTSET, MAX_ROM_SIZE, MEMORY_SIZE, PROGRAM_START
from .errors import MemoryFault, RomError


class Memory:
    """4096 bytes: the interpreter area holds the font, programs load at 0x200."""

    def __init__(self):
        self.data = bytearray(MEMORY_SIZE)
        # Load fontset into memory
        self.data[:len(FONTSET)] = bytes(FONTSET)

    def __len__(self):
        return len(self.data)

    def _check(self, address, count=1):
        if address < 0 or address + count > MEMORY_SIZE:
            if count == 1:
                raise MemoryFault("Memory access out of bounds: 0x%X" % address)
            raise MemoryFault("Memory access out of bounds: 0x%X..0x%X"
                              % (address, address + count - 1))

    def read(self, address):
        self._check(address)
        return self.data[address]

    def write(self, address, value):
        self._check(address)
        self.data[address] = value & 0xFF

    def read_word(self, address):
        """Big-endian 16-bit read, used for opcode fetch."""
        self._check(address, 2)
        return (self.data[address] << 8) | self.data[address + 1]

    def read_block(self, address, count):
        self._check(address, count)
        return bytes(self.data[address:address + count])

    def write_block(self, address, values):
        values = bytes(v & 0xFF for v in values)
        self._check(address, len(values))
        self.data[address:address + len(values)] = values

    def load_program(self, rom):
        if len(rom) > MAX_ROM_SIZE:
            raise RomError("ROM is %d bytes, program space is %d bytes"
                           % (len(rom), MAX_ROM_SIZE))
        self.data[PROGRAM_START:PROGRAM_START + len(rom)] = rom
