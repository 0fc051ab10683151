import argparse
import sys

from .cpu import Chip8
from .errors import RomError
from .log import set_logging, warn


def build_parser():
    parser = argparse.ArgumentParser(prog="chip8", description="CHIP-8 emulator")
    parser.add_argument("rom", nargs="?", help="path to a raw CHIP-8 ROM")
    parser.add_argument("--log", action="store_true",
                        help="start with instruction logging on (F1 toggles)")
    parser.add_argument("--seed", type=int, default=None,
                        help="seed for the RND instruction")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.rom is None:
        parser.print_usage()
        print("Program must take an argument, the path to the ROM to be loaded.")
        return 0

    set_logging(args.log)
    machine = Chip8(seed=args.seed)
    try:
        machine.load_rom(args.rom)
    except RomError as e:
        warn("Error:", e)
        return 1

    # Window creation needs a display, so it only happens once the ROM is good
    import pyglet
    from .window import Chip8Window

    Chip8Window(machine, args.rom)
    pyglet.app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
