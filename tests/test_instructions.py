from chip8.instructions import OPCODE_TABLE, Op, decode


def test_decode_extracts_every_operand_field():
    ins = decode(0xD123)
    assert ins.op is Op.DRW
    assert ins.raw == 0xD123
    assert (ins.x, ins.y, ins.n) == (1, 2, 3)
    assert ins.nn == 0x23
    assert ins.nnn == 0x123


def test_table_covers_each_opcode_once():
    ops = [op for _, _, op in OPCODE_TABLE]
    assert len(ops) == 35
    assert len(set(ops)) == 35
    assert set(ops) == set(Op) - {Op.UNKNOWN}


def test_exact_patterns_take_precedence_over_sys():
    assert decode(0x00E0).op is Op.CLS
    assert decode(0x00EE).op is Op.RET
    assert decode(0x0123).op is Op.SYS


def test_alu_sub_selectors():
    expected = {
        0x0: Op.LD_VX_VY, 0x1: Op.OR, 0x2: Op.AND, 0x3: Op.XOR,
        0x4: Op.ADD_VX_VY, 0x5: Op.SUB, 0x6: Op.SHR, 0x7: Op.SUBN,
        0xE: Op.SHL,
    }
    for low in range(16):
        op = decode(0x8120 | low).op
        assert op is expected.get(low, Op.UNKNOWN)


def test_f_group_selectors():
    assert decode(0xF307).op is Op.LD_VX_DT
    assert decode(0xF30A).op is Op.LD_VX_K
    assert decode(0xF315).op is Op.LD_DT_VX
    assert decode(0xF318).op is Op.LD_ST_VX
    assert decode(0xF31E).op is Op.ADD_I_VX
    assert decode(0xF329).op is Op.LD_F_VX
    assert decode(0xF333).op is Op.LD_B_VX
    assert decode(0xF355).op is Op.LD_MEM_VX
    assert decode(0xF365).op is Op.LD_VX_MEM
    assert decode(0xF399).op is Op.UNKNOWN


def test_malformed_register_forms_are_unknown():
    assert decode(0x5121).op is Op.UNKNOWN
    assert decode(0x912F).op is Op.UNKNOWN
    assert decode(0xE1FF).op is Op.UNKNOWN


def test_mnemonics():
    assert decode(0x8AB4).mnemonic() == "ADD VA, VB"
    assert decode(0x6A3B).mnemonic() == "LD VA, 0x3B"
    assert decode(0xA300).mnemonic() == "LD I, 0x300"
    assert decode(0xB208).mnemonic() == "JP V0, 0x208"
    assert decode(0xD015).mnemonic() == "DRW V0, V1, 5"
    assert decode(0xF255).mnemonic() == "LD [I], V2"
    assert decode(0x00E0).mnemonic() == "CLS"
    assert str(decode(0xFFFF)) == "DW 0xFFFF"
