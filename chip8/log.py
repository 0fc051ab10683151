import sys

#make it true if you want the logs
logs_on = False


def set_logging(on):
    global logs_on
    logs_on = bool(on)


def toggle_logging():
    set_logging(not logs_on)
    log("logs_on:", logs_on)
    return logs_on


def log(*args):
    if logs_on:
        print(*args)


def warn(*args):
    """Diagnostics that are always shown (unknown opcodes, faults)."""
    print(*args, file=sys.stderr)


def beep():
    """Report the buzzer; always shown, with the terminal bell."""
    print("BEEP!\a")
