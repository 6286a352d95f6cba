"""Renderers for branches, exception generation and system instructions.

Branch targets are printed as the signed immediate offset carried by the
instruction; resolving them to addresses is left to the caller.
"""

from __future__ import annotations

from typing import Dict, List

from ..constants import ISB_DEFAULT_OPTION
from ..instr.instruction import (
    Instruction,
    operand_at,
    require_arity,
    unhandled,
    unpack,
)
from ..instr.opcodes import Family, Opcode
from ..instr.operands import LINK_REGISTER, Immediate, Register
from ..tokens import TInstr, Token
from .helpers import (
    barrier_tokens,
    cond_tokens,
    decimal,
    instr,
    sysreg_field,
)


def render_conditional_branch(insn: Instruction) -> List[Token]:
    (offset,) = unpack(insn, Immediate)
    if insn.opcode != Opcode.B_COND:
        raise unhandled(insn, Family.CONDITIONAL_BRANCH.value)
    mnemonic = "b." + str(cond_tokens(insn.cc)[0])
    return instr(mnemonic, offset.render_signed())


_EXCEPTION_WITH_IMM: Dict[Opcode, str] = {
    Opcode.SVC: "svc",
    Opcode.HVC: "hvc",
    Opcode.SMC: "smc",
    Opcode.BRK: "brk",
    Opcode.HLT: "hlt",
}

_EXCEPTION_BARE: Dict[Opcode, str] = {
    Opcode.DCPS1: "dcps1",
    Opcode.DCPS2: "dcps2",
    Opcode.DCPS3: "dcps3",
}


def render_exception_generation(insn: Instruction) -> List[Token]:
    (imm,) = unpack(insn, Immediate)
    if insn.opcode in _EXCEPTION_WITH_IMM:
        return instr(_EXCEPTION_WITH_IMM[insn.opcode], imm.render_decimal())
    if insn.opcode in _EXCEPTION_BARE:
        return instr(_EXCEPTION_BARE[insn.opcode])
    raise unhandled(insn, Family.EXCEPTION_GENERATION.value)


# hint-space instructions that take no operands
_SYSTEM_BARE: Dict[Opcode, str] = {
    Opcode.NOP: "nop",
    Opcode.YIELD: "yield",
    Opcode.WFE: "wfe",
    Opcode.WFI: "wfi",
    Opcode.SEV: "sev",
    Opcode.SEVL: "sevl",
    Opcode.XPACLRI: "xpaclri",
    Opcode.PACIA1716: "pacia1716",
    Opcode.PACIB1716: "pacib1716",
    Opcode.AUTIA1716: "autia1716",
    Opcode.AUTIB1716: "autib1716",
    Opcode.ESB: "esb",
    Opcode.PSB_CSYNC: "psb csync",
    Opcode.PACIAZ: "paciaz",
    Opcode.PACIASP: "paciasp",
    Opcode.PACIBZ: "pacibz",
    Opcode.PACIBSP: "pacibsp",
    Opcode.AUTIAZ: "autiaz",
    Opcode.AUTIASP: "autiasp",
    Opcode.AUTIBZ: "autibz",
    Opcode.AUTIBSP: "autibsp",
    Opcode.CLREX: "clrex",
}


def _render_sys(insn: Instruction) -> List[Token]:
    op1, crn, crm, op2, rt = unpack(
        insn, Immediate, Immediate, Immediate, Immediate, Register
    )
    parts = [
        op1.render_decimal(),
        sysreg_field("C", crn.value),
        sysreg_field("C", crm.value),
        op2.render_decimal(),
    ]
    if not rt.is_zero():
        parts.append(rt.render())
    return instr("sys", *parts)


def _render_sysl(insn: Instruction) -> List[Token]:
    rt, op1, crn, crm, op2 = unpack(
        insn, Register, Immediate, Immediate, Immediate, Immediate
    )
    return instr(
        "sysl",
        rt,
        op1.render_decimal(),
        sysreg_field("C", crn.value),
        sysreg_field("C", crm.value),
        op2.render_decimal(),
    )


def render_system(insn: Instruction) -> List[Token]:
    op = insn.opcode
    if op in _SYSTEM_BARE:
        return [TInstr(_SYSTEM_BARE[op])]
    if op == Opcode.HINT:
        require_arity(insn, 1)
        return instr("hint", *insn.operands)
    if op in (Opcode.DSB, Opcode.DMB):
        (option,) = unpack(insn, Immediate)
        return instr("dsb" if op == Opcode.DSB else "dmb", barrier_tokens(option.value))
    if op == Opcode.ISB:
        (option,) = unpack(insn, Immediate)
        if option.value == ISB_DEFAULT_OPTION:
            return [TInstr("isb")]
        return instr("isb", decimal(option.value))
    if op == Opcode.SYS:
        return _render_sys(insn)
    if op == Opcode.SYSL:
        return _render_sysl(insn)
    if op == Opcode.MSR:
        return instr("msr", *insn.operands)
    if op == Opcode.MRS:
        return instr("mrs", *insn.operands)
    raise unhandled(insn, Family.SYSTEM.value)


_BRANCH_REGISTER: Dict[Opcode, str] = {
    Opcode.BR: "br",
    Opcode.BRAAZ: "braaz",
    Opcode.BRABZ: "brabz",
    Opcode.BLR: "blr",
    Opcode.BLRAAZ: "blraaz",
    Opcode.BLRABZ: "blrabz",
}

# authenticated branches taking a modifier register
_BRANCH_REGISTER_MODIFIER: Dict[Opcode, str] = {
    Opcode.BRAA: "braa",
    Opcode.BRAB: "brab",
    Opcode.BLRAA: "blraa",
    Opcode.BLRAB: "blrab",
}

_RETURNS: Dict[Opcode, str] = {
    Opcode.RET: "ret",
    Opcode.RETAA: "retaa",
    Opcode.RETAB: "retab",
}

_EXCEPTION_RETURNS: Dict[Opcode, str] = {
    Opcode.ERET: "eret",
    Opcode.ERETAA: "eretaa",
    Opcode.ERETAB: "eretab",
    Opcode.DRPS: "drps",
}


def render_branch_register(insn: Instruction) -> List[Token]:
    op = insn.opcode
    if op in _EXCEPTION_RETURNS:
        return [TInstr(_EXCEPTION_RETURNS[op])]
    rn = operand_at(insn, 0, Register)
    if op in _BRANCH_REGISTER:
        require_arity(insn, 1)
        return instr(_BRANCH_REGISTER[op], rn)
    if op in _RETURNS:
        require_arity(insn, 1)
        if rn.name == LINK_REGISTER:
            return [TInstr(_RETURNS[op])]
        return instr(_RETURNS[op], rn)
    if op in _BRANCH_REGISTER_MODIFIER:
        require_arity(insn, 2)
        return instr(_BRANCH_REGISTER_MODIFIER[op], rn, insn.operands[1])
    raise unhandled(insn, Family.BRANCH_REGISTER.value)


def render_branch_immediate(insn: Instruction) -> List[Token]:
    (offset,) = unpack(insn, Immediate)
    if insn.opcode == Opcode.BL:
        return instr("bl", offset.render_signed())
    if insn.opcode == Opcode.B:
        return instr("b", offset.render_signed())
    raise unhandled(insn, Family.BRANCH_IMMEDIATE.value)


def render_compare_and_branch(insn: Instruction) -> List[Token]:
    rt, offset = unpack(insn, Register, Immediate)
    if insn.opcode == Opcode.CBZ:
        return instr("cbz", rt, offset.render_signed())
    if insn.opcode == Opcode.CBNZ:
        return instr("cbnz", rt, offset.render_signed())
    raise unhandled(insn, Family.COMPARE_AND_BRANCH.value)


def render_test_and_branch(insn: Instruction) -> List[Token]:
    rt, bit, offset = unpack(insn, Register, Immediate, Immediate)
    if insn.opcode == Opcode.TBZ:
        mnemonic = "tbz"
    elif insn.opcode == Opcode.TBNZ:
        mnemonic = "tbnz"
    else:
        raise unhandled(insn, Family.TEST_AND_BRANCH.value)
    return instr(mnemonic, rt, bit.render_decimal(), offset.render_signed())


__all__ = [
    "render_conditional_branch",
    "render_exception_generation",
    "render_system",
    "render_branch_register",
    "render_branch_immediate",
    "render_compare_and_branch",
    "render_test_and_branch",
]
