import numpy as np

from .config import STACK_DEPTH
from .errors import StackOverflow, StackUnderflow


class Stack:
    """Return addresses for 2NNN/00EE, sixteen levels deep."""

    def __init__(self):
        self.slots = np.zeros(STACK_DEPTH, dtype=np.uint16)
        self.sp = 0

    def __len__(self):
        return self.sp

    @property
    def depth(self):
        return self.sp

    def push(self, address):
        if self.sp >= STACK_DEPTH:
            raise StackOverflow("Stack overflow on CALL")
        self.slots[self.sp] = address
        self.sp += 1

    def pop(self):
        if self.sp == 0:
            raise StackUnderflow("Stack underflow on RET")
        self.sp -= 1
        return int(self.slots[self.sp])

    def peek(self):
        if self.sp == 0:
            return None
        return int(self.slots[self.sp - 1])

    def reset(self):
        self.slots[:] = 0
        self.sp = 0
