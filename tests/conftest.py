import pytest

from chip8 import Chip8


def program(*opcodes):
    return b"".join(op.to_bytes(2, "big") for op in opcodes)


@pytest.fixture
def make_machine():
    """Build a machine with the given opcodes loaded at 0x200."""
    def _make(*opcodes, seed=1234):
        machine = Chip8(seed=seed)
        machine.load_program(program(*opcodes))
        return machine
    return _make
