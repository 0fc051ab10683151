"""CHIP-8 instruction decoding.

Each opcode is decoded once per fetch into an ``Instruction``: an ``Op`` tag
plus every operand field already extracted, so handlers never re-mask the
raw opcode.
"""

from dataclasses import dataclass
from enum import Enum


class Op(Enum):
    # value is the assembler template used by Instruction.mnemonic()
    SYS = "SYS 0x{nnn:03X}"             # 0nnn - machine code routine (ignored)
    CLS = "CLS"                         # 00E0 - clear the display
    RET = "RET"                         # 00EE - return from subroutine
    JP = "JP 0x{nnn:03X}"               # 1nnn - jump
    CALL = "CALL 0x{nnn:03X}"           # 2nnn - call subroutine
    SE_VX_NN = "SE V{x:X}, 0x{nn:02X}"  # 3xkk - skip if Vx == kk
    SNE_VX_NN = "SNE V{x:X}, 0x{nn:02X}"  # 4xkk - skip if Vx != kk
    SE_VX_VY = "SE V{x:X}, V{y:X}"      # 5xy0 - skip if Vx == Vy
    LD_VX_NN = "LD V{x:X}, 0x{nn:02X}"  # 6xkk - Vx = kk
    ADD_VX_NN = "ADD V{x:X}, 0x{nn:02X}"  # 7xkk - Vx += kk, no carry
    LD_VX_VY = "LD V{x:X}, V{y:X}"      # 8xy0
    OR = "OR V{x:X}, V{y:X}"            # 8xy1
    AND = "AND V{x:X}, V{y:X}"          # 8xy2
    XOR = "XOR V{x:X}, V{y:X}"          # 8xy3
    ADD_VX_VY = "ADD V{x:X}, V{y:X}"    # 8xy4 - VF = carry
    SUB = "SUB V{x:X}, V{y:X}"          # 8xy5 - VF = NOT borrow
    SHR = "SHR V{x:X}"                  # 8xy6 - VF = bit 0
    SUBN = "SUBN V{x:X}, V{y:X}"        # 8xy7 - VF = NOT borrow
    SHL = "SHL V{x:X}"                  # 8xyE - VF = bit 7
    SNE_VX_VY = "SNE V{x:X}, V{y:X}"    # 9xy0 - skip if Vx != Vy
    LD_I = "LD I, 0x{nnn:03X}"          # Annn
    JP_V0 = "JP V0, 0x{nnn:03X}"        # Bnnn
    RND = "RND V{x:X}, 0x{nn:02X}"      # Cxkk
    DRW = "DRW V{x:X}, V{y:X}, {n}"     # Dxyn
    SKP = "SKP V{x:X}"                  # Ex9E
    SKNP = "SKNP V{x:X}"                # ExA1
    LD_VX_DT = "LD V{x:X}, DT"          # Fx07
    LD_VX_K = "LD V{x:X}, K"            # Fx0A - wait for key
    LD_DT_VX = "LD DT, V{x:X}"          # Fx15
    LD_ST_VX = "LD ST, V{x:X}"          # Fx18
    ADD_I_VX = "ADD I, V{x:X}"          # Fx1E
    LD_F_VX = "LD F, V{x:X}"            # Fx29 - font glyph address
    LD_B_VX = "LD B, V{x:X}"            # Fx33 - BCD
    LD_MEM_VX = "LD [I], V{x:X}"        # Fx55 - store V0..Vx
    LD_VX_MEM = "LD V{x:X}, [I]"        # Fx65 - load V0..Vx
    UNKNOWN = "DW 0x{raw:04X}"


# (mask, pattern, op) - first match wins, so exact patterns come first
OPCODE_TABLE = [
    (0xFFFF, 0x00E0, Op.CLS),
    (0xFFFF, 0x00EE, Op.RET),
    (0xF000, 0x0000, Op.SYS),

    (0xF000, 0x1000, Op.JP),
    (0xF000, 0x2000, Op.CALL),
    (0xF000, 0x3000, Op.SE_VX_NN),
    (0xF000, 0x4000, Op.SNE_VX_NN),
    (0xF00F, 0x5000, Op.SE_VX_VY),
    (0xF000, 0x6000, Op.LD_VX_NN),
    (0xF000, 0x7000, Op.ADD_VX_NN),

    (0xF00F, 0x8000, Op.LD_VX_VY),
    (0xF00F, 0x8001, Op.OR),
    (0xF00F, 0x8002, Op.AND),
    (0xF00F, 0x8003, Op.XOR),
    (0xF00F, 0x8004, Op.ADD_VX_VY),
    (0xF00F, 0x8005, Op.SUB),
    (0xF00F, 0x8006, Op.SHR),
    (0xF00F, 0x8007, Op.SUBN),
    (0xF00F, 0x800E, Op.SHL),

    (0xF00F, 0x9000, Op.SNE_VX_VY),
    (0xF000, 0xA000, Op.LD_I),
    (0xF000, 0xB000, Op.JP_V0),
    (0xF000, 0xC000, Op.RND),
    (0xF000, 0xD000, Op.DRW),

    (0xF0FF, 0xE09E, Op.SKP),
    (0xF0FF, 0xE0A1, Op.SKNP),

    (0xF0FF, 0xF007, Op.LD_VX_DT),
    (0xF0FF, 0xF00A, Op.LD_VX_K),
    (0xF0FF, 0xF015, Op.LD_DT_VX),
    (0xF0FF, 0xF018, Op.LD_ST_VX),
    (0xF0FF, 0xF01E, Op.ADD_I_VX),
    (0xF0FF, 0xF029, Op.LD_F_VX),
    (0xF0FF, 0xF033, Op.LD_B_VX),
    (0xF0FF, 0xF055, Op.LD_MEM_VX),
    (0xF0FF, 0xF065, Op.LD_VX_MEM),
]


@dataclass(frozen=True)
class Instruction:
    """Decoded CHIP-8 instruction with extracted operands."""
    op: Op
    raw: int
    x: int    # second nibble (Vx register)
    y: int    # third nibble (Vy register)
    n: int    # fourth nibble (4-bit immediate)
    nn: int   # last byte (8-bit immediate)
    nnn: int  # last 12 bits (address)

    def mnemonic(self):
        return self.op.value.format(x=self.x, y=self.y, n=self.n, nn=self.nn,
                                    nnn=self.nnn, raw=self.raw)

    def __str__(self):
        return self.mnemonic()


def lookup(opcode):
    for mask, pattern, op in OPCODE_TABLE:
        if (opcode & mask) == pattern:
            return op
    return Op.UNKNOWN


def decode(opcode):
    """Decode a 16-bit opcode into an Instruction."""
    opcode &= 0xFFFF
    return Instruction(
        op=lookup(opcode),
        raw=opcode,
        x=(opcode & 0x0F00) >> 8,
        y=(opcode & 0x00F0) >> 4,
        n=opcode & 0x000F,
        nn=opcode & 0x00FF,
        nnn=opcode & 0x0FFF,
    )
