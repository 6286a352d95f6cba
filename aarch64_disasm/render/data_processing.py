"""Renderers for the data-processing encoding families.

Each renderer receives an instruction of its own family and picks between the
raw mnemonic and the preferred architectural alias, following the alias
conditions of the Arm ARM (``ADD (immediate)`` -> ``MOV``, ``SUBS`` ->
``CMP``, ``UBFM`` -> ``LSL`` and so on).
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from ..constants import (
    EXTEND_IMMS,
    FULL_WIDTH_IMMS,
    mask_for_width,
    register_bits,
)
from ..instr.instruction import (
    Instruction,
    operand_at,
    require_arity,
    unhandled,
    unpack,
)
from ..instr.opcodes import Family, Opcode
from ..instr.operands import Extend, Immediate, Register, Shift, ShiftType
from ..tokens import Token
from .helpers import cond_tokens, decimal, instr


def render_pc_relative_addressing(insn: Instruction) -> List[Token]:
    rd, imm, _shift = unpack(insn, Register, Immediate, Shift)
    if insn.opcode == Opcode.ADR:
        return instr("adr", rd, imm.render_signed())
    if insn.opcode == Opcode.ADRP:
        # the page offset is counted in 4KiB pages
        width = min(imm.size + 12, 64)
        page = Immediate((imm.value << 12) & mask_for_width(width), width)
        return instr("adrp", rd, page.render_signed())
    raise unhandled(insn, Family.PC_RELATIVE_ADDRESSING.value)


def render_add_subtract_immediate(insn: Instruction) -> List[Token]:
    rd, rn, imm, shift = unpack(insn, Register, Register, Immediate, Shift)
    if insn.opcode not in (Opcode.ADD_IMMEDIATE, Opcode.SUB_IMMEDIATE):
        raise unhandled(insn, Family.ADD_SUBTRACT_IMMEDIATE.value)
    is_sub = insn.opcode == Opcode.SUB_IMMEDIATE

    if imm.value == 0 and ((not insn.set_flags and rd.is_sp()) or rn.is_sp()):
        return instr("mov", rd, rn)
    if rd.is_zero():
        return instr("cmp" if is_sub else "cmn", rn, imm, shift)
    mnemonic = ("sub" if is_sub else "add") + ("s" if insn.set_flags else "")
    return instr(mnemonic, rd, rn, imm, shift)


def render_logical_immediate(insn: Instruction) -> List[Token]:
    rd, rn, imm = unpack(insn, Register, Register, Immediate)
    if insn.opcode == Opcode.AND_IMMEDIATE:
        if not insn.set_flags:
            return instr("and", rd, rn, imm)
        if rd.is_zero():
            return instr("tst", rn, imm)
        return instr("ands", rd, rn, imm)
    if insn.opcode == Opcode.ORR_IMMEDIATE:
        if rn.is_zero():
            return instr("mov", rd, imm)
        return instr("orr", rd, rn, imm)
    if insn.opcode == Opcode.EOR_IMMEDIATE:
        return instr("eor", rd, rn, imm)
    raise unhandled(insn, Family.LOGICAL_IMMEDIATE.value)


def render_move_wide_immediate(insn: Instruction) -> List[Token]:
    rd, imm, shift = unpack(insn, Register, Immediate, Shift)
    mask = mask_for_width(register_bits(rd.size))
    if insn.opcode == Opcode.MOVK:
        return instr("movk", rd, Immediate(imm.value & mask, imm.size), shift)
    if insn.opcode == Opcode.MOVZ:
        value = imm.value << shift.count
    elif insn.opcode == Opcode.MOVN:
        value = ~(imm.value << shift.count)
    else:
        raise unhandled(insn, Family.MOVE_WIDE_IMMEDIATE.value)
    return instr("mov", rd, Immediate(value & mask, register_bits(rd.size)))


def _bitfield_lsb_width(datasize: int, immr: int, imms: int) -> Tuple[List[Token], List[Token]]:
    """Operands of the insert forms (``bfi``/``sbfiz``/``ubfiz``)."""
    return decimal(datasize - immr), decimal(imms + 1)


def _bitfield_extract(immr: int, imms: int) -> Tuple[List[Token], List[Token]]:
    """Operands of the extract forms (``bfxil``/``sbfx``/``ubfx``)."""
    return decimal(immr), decimal(imms - immr + 1)


def render_bitfield(insn: Instruction) -> List[Token]:
    rd, rn, immr_op, imms_op = unpack(insn, Register, Register, Immediate, Immediate)
    datasize = register_bits(rd.size)
    immr, imms = immr_op.value, imms_op.value
    full_width = imms == FULL_WIDTH_IMMS[datasize]

    if insn.opcode == Opcode.BFM:
        if imms < immr:
            lsb, width = _bitfield_lsb_width(datasize, immr, imms)
            if rn.is_zero():
                return instr("bfc", rd, lsb, width)
            return instr("bfi", rd, rn, lsb, width)
        return instr("bfxil", rd, rn, *_bitfield_extract(immr, imms))

    if insn.opcode == Opcode.SBFM:
        if full_width:
            return instr("asr", rd, rn, decimal(immr))
        if imms < immr:
            return instr("sbfiz", rd, rn, *_bitfield_lsb_width(datasize, immr, imms))
        if immr == 0 and imms in EXTEND_IMMS:
            return instr("sxt" + EXTEND_IMMS[imms], rd, rn)
        return instr("sbfx", rd, rn, *_bitfield_extract(immr, imms))

    if insn.opcode == Opcode.UBFM:
        if not full_width and imms + 1 == immr:
            return instr("lsl", rd, rn, decimal(datasize - immr))
        if full_width:
            return instr("lsr", rd, rn, decimal(immr))
        if imms < immr:
            return instr("ubfiz", rd, rn, *_bitfield_lsb_width(datasize, immr, imms))
        if immr == 0 and imms in EXTEND_IMMS:
            return instr("uxt" + EXTEND_IMMS[imms], rd, rn)
        return instr("ubfx", rd, rn, *_bitfield_extract(immr, imms))

    raise unhandled(insn, Family.BITFIELD.value)


def render_extract(insn: Instruction) -> List[Token]:
    rd, rn, rm, imm = unpack(insn, Register, Register, Register, Immediate)
    if insn.opcode != Opcode.EXTR:
        raise unhandled(insn, Family.EXTRACT.value)
    if rn.name == rm.name:
        return instr("ror", rd, rn, imm.render_decimal())
    return instr("extr", rd, rn, rm, imm.render_decimal())


_TWO_SOURCE: Dict[Opcode, str] = {
    Opcode.ASR: "asr",
    Opcode.LSL: "lsl",
    Opcode.LSR: "lsr",
    Opcode.ROR: "ror",
    Opcode.SDIV: "sdiv",
    Opcode.UDIV: "udiv",
    Opcode.PACGA: "pacga",
    Opcode.CRC32B: "crc32b",
    Opcode.CRC32H: "crc32h",
    Opcode.CRC32W: "crc32w",
    Opcode.CRC32X: "crc32x",
    Opcode.CRC32CB: "crc32cb",
    Opcode.CRC32CH: "crc32ch",
    Opcode.CRC32CW: "crc32cw",
    Opcode.CRC32CX: "crc32cx",
}


def render_data_processing_two_source(insn: Instruction) -> List[Token]:
    require_arity(insn, 3)
    mnemonic = _TWO_SOURCE.get(insn.opcode)
    if mnemonic is None:
        raise unhandled(insn, Family.DATA_PROCESSING_TWO_SOURCE.value)
    return instr(mnemonic, *insn.operands)


_ONE_SOURCE: Dict[Opcode, str] = {
    Opcode.RBIT: "rbit",
    Opcode.REV16: "rev16",
    Opcode.REV32: "rev32",
    Opcode.REV: "rev",
    Opcode.CLZ: "clz",
    Opcode.CLS: "cls",
}

# pointer authentication: (mnemonic, mnemonic when Rn is the zero register)
_ONE_SOURCE_PAC: Dict[Opcode, Tuple[str, str]] = {
    Opcode.PACIA: ("pacia", "paciza"),
    Opcode.PACIB: ("pacib", "pacizb"),
    Opcode.PACDA: ("pacda", "pacdza"),
    Opcode.PACDB: ("pacdb", "pacdzb"),
    Opcode.AUTIA: ("autia", "autiza"),
    Opcode.AUTIB: ("autib", "autizb"),
    Opcode.AUTDA: ("autda", "autdza"),
    Opcode.AUTDB: ("autdb", "autdzb"),
}


def render_data_processing_one_source(insn: Instruction) -> List[Token]:
    rd, rn = unpack(insn, Register, Register)
    if insn.opcode in _ONE_SOURCE:
        return instr(_ONE_SOURCE[insn.opcode], rd, rn)
    if insn.opcode in _ONE_SOURCE_PAC:
        mnemonic, zero_form = _ONE_SOURCE_PAC[insn.opcode]
        if rn.is_zero():
            return instr(zero_form, rd)
        return instr(mnemonic, rd, rn)
    if insn.opcode == Opcode.XPACI:
        return instr("xpaci", rd)
    if insn.opcode == Opcode.XPACD:
        return instr("xpacd", rd)
    raise unhandled(insn, Family.DATA_PROCESSING_ONE_SOURCE.value)


def _no_shift(shift: Shift) -> bool:
    return shift.type is ShiftType.NONE or (shift.type is ShiftType.LSL and shift.count == 0)


def render_logical_shifted_register(insn: Instruction) -> List[Token]:
    rd, rn, rm, shift = unpack(insn, Register, Register, Register, Shift)
    op = insn.opcode
    if op == Opcode.AND_SHIFTED_REGISTER:
        if insn.set_flags and rd.is_zero():
            return instr("tst", rn, rm, shift)
        return instr("ands" if insn.set_flags else "and", rd, rn, rm, shift)
    if op == Opcode.BIC_SHIFTED_REGISTER:
        return instr("bics" if insn.set_flags else "bic", rd, rn, rm, shift)
    if op == Opcode.ORR_SHIFTED_REGISTER:
        if rn.is_zero() and _no_shift(shift):
            return instr("mov", rd, rm)
        return instr("orr", rd, rn, rm, shift)
    if op == Opcode.ORN_SHIFTED_REGISTER:
        if rn.is_zero():
            return instr("mvn", rd, rm, shift)
        return instr("orn", rd, rn, rm, shift)
    if op == Opcode.EOR_SHIFTED_REGISTER:
        return instr("eor", rd, rn, rm, shift)
    if op == Opcode.EON_SHIFTED_REGISTER:
        return instr("eon", rd, rn, rm, shift)
    raise unhandled(insn, Family.LOGICAL_SHIFTED_REGISTER.value)


def render_add_subtract_shifted_register(insn: Instruction) -> List[Token]:
    rd, rn, rm, shift = unpack(insn, Register, Register, Register, Shift)
    if insn.opcode == Opcode.SUB_SHIFTED_REGISTER:
        if insn.set_flags:
            if rd.is_zero():
                return instr("cmp", rn, rm, shift)
            if rn.is_zero():
                return instr("negs", rd, rm, shift)
            return instr("subs", rd, rn, rm, shift)
        if rn.is_zero():
            return instr("neg", rd, rm, shift)
        return instr("sub", rd, rn, rm, shift)
    if insn.opcode == Opcode.ADD_SHIFTED_REGISTER:
        if insn.set_flags:
            if rd.is_zero():
                return instr("cmn", rn, rm, shift)
            return instr("adds", rd, rn, rm, shift)
        return instr("add", rd, rn, rm, shift)
    raise unhandled(insn, Family.ADD_SUBTRACT_SHIFTED_REGISTER.value)


def render_add_subtract_extended_register(insn: Instruction) -> List[Token]:
    rd, rn, rm, extend = unpack(insn, Register, Register, Register, Extend)
    if insn.opcode == Opcode.SUB_EXTENDED_REGISTER:
        base, compare = "sub", "cmp"
    elif insn.opcode == Opcode.ADD_EXTENDED_REGISTER:
        base, compare = "add", "cmn"
    else:
        raise unhandled(insn, Family.ADD_SUBTRACT_EXTENDED_REGISTER.value)
    if insn.set_flags:
        if rd.is_zero():
            return instr(compare, rn, rm, extend)
        return instr(base + "s", rd, rn, rm, extend)
    return instr(base, rd, rn, rm, extend)


def render_add_subtract_with_carry(insn: Instruction) -> List[Token]:
    rd, rn, rm = unpack(insn, Register, Register, Register)
    suffix = "s" if insn.set_flags else ""
    if insn.opcode == Opcode.SBC:
        if rn.is_zero():
            return instr("ngc" + suffix, rd, rm)
        return instr("sbc" + suffix, rd, rn, rm)
    if insn.opcode == Opcode.ADC:
        return instr("adc" + suffix, rd, rn, rm)
    raise unhandled(insn, Family.ADD_SUBTRACT_WITH_CARRY.value)


def render_conditional_compare(insn: Instruction) -> List[Token]:
    require_arity(insn, 3)
    operand_at(insn, 0, Register)
    if insn.opcode == Opcode.CCMN:
        mnemonic = "ccmn"
    elif insn.opcode == Opcode.CCMP:
        mnemonic = "ccmp"
    else:
        raise unhandled(insn, Family.CONDITIONAL_COMPARE.value)
    return instr(mnemonic, *insn.operands, cond_tokens(insn.cc))


# opcode -> (raw form, same-register alias, zero-register alias or None)
_CONDITIONAL_SELECT: Dict[Opcode, Tuple[str, str, Optional[str]]] = {
    Opcode.CSINC: ("csinc", "cinc", "cset"),
    Opcode.CSINV: ("csinv", "cinv", "csetm"),
    Opcode.CSNEG: ("csneg", "cneg", None),
}


def render_conditional_select(insn: Instruction) -> List[Token]:
    rd, rn, rm = unpack(insn, Register, Register, Register)
    cc = cond_tokens(insn.cc)
    if insn.opcode == Opcode.CSEL:
        return instr("csel", rd, rn, rm, cc)
    if insn.opcode not in _CONDITIONAL_SELECT:
        raise unhandled(insn, Family.CONDITIONAL_SELECT.value)
    raw, same, zero = _CONDITIONAL_SELECT[insn.opcode]
    if zero is not None and rn.is_zero() and rm.is_zero():
        return instr(zero, rd, cc)
    if rn.name == rm.name:
        return instr(same, rd, rn, cc)
    return instr(raw, rd, rn, rm, cc)


# opcode -> (accumulating form, alias when Ra is the zero register)
_THREE_SOURCE: Dict[Opcode, Tuple[str, str]] = {
    Opcode.MADD: ("madd", "mul"),
    Opcode.MSUB: ("msub", "mneg"),
    Opcode.SMADDL: ("smaddl", "smull"),
    Opcode.SMSUBL: ("smsubl", "smnegl"),
    Opcode.UMADDL: ("umaddl", "umull"),
    Opcode.UMSUBL: ("umsubl", "umnegl"),
}


def render_data_processing_three_source(insn: Instruction) -> List[Token]:
    rd, rn, rm, ra = unpack(insn, Register, Register, Register, Register)
    if insn.opcode == Opcode.SMULH:
        return instr("smulh", rd, rn, rm)
    if insn.opcode == Opcode.UMULH:
        return instr("umulh", rd, rn, rm)
    if insn.opcode not in _THREE_SOURCE:
        raise unhandled(insn, Family.DATA_PROCESSING_THREE_SOURCE.value)
    accumulate, product = _THREE_SOURCE[insn.opcode]
    if ra.is_zero():
        return instr(product, rd, rn, rm)
    return instr(accumulate, rd, rn, rm, ra)


__all__ = [
    "render_pc_relative_addressing",
    "render_add_subtract_immediate",
    "render_logical_immediate",
    "render_move_wide_immediate",
    "render_bitfield",
    "render_extract",
    "render_data_processing_two_source",
    "render_data_processing_one_source",
    "render_logical_shifted_register",
    "render_add_subtract_shifted_register",
    "render_add_subtract_extended_register",
    "render_add_subtract_with_carry",
    "render_conditional_compare",
    "render_conditional_select",
    "render_data_processing_three_source",
]
