from .cpu import Chip8, RunState
from .errors import (Chip8Error, Chip8Fault, KeyIndexError, MemoryFault,
                     RegisterFault, RomError, StackOverflow, StackUnderflow)
from .instructions import Instruction, Op, decode

__all__ = [
    "Chip8", "RunState", "Instruction", "Op", "decode",
    "Chip8Error", "Chip8Fault", "RomError", "StackOverflow", "StackUnderflow",
    "MemoryFault", "RegisterFault", "KeyIndexError",
]
