from pathlib import Path

from .config import MAX_ROM_SIZE
from .errors import RomError


def read_rom(path):
    """Read a raw CHIP-8 ROM, refusing anything that would not fit at 0x200."""
    path = Path(path)
    if not path.is_file():
        raise RomError("ROM not found: %s" % path)
    try:
        rom = path.read_bytes()
    except OSError as e:
        raise RomError("Cannot read ROM %s: %s" % (path, e)) from e
    if len(rom) > MAX_ROM_SIZE:
        raise RomError("ROM %s is %d bytes, at most %d fit in memory"
                       % (path, len(rom), MAX_ROM_SIZE))
    return rom
