from __future__ import annotations

from typing import Dict, List, Tuple

from ..instr.instruction import (
    Instruction,
    RenderContractError,
    operand_at,
    require_arity,
    unhandled,
)
from ..instr.opcodes import Family, Opcode
from ..instr.operands import (
    Immediate,
    ImmediateOffset,
    Register,
    RegisterOffset,
)
from ..tokens import Token
from .helpers import instr, prefetch_tokens

# opcode -> (mnemonic, pair form)
_EXCLUSIVE_LOADS: Dict[Opcode, Tuple[str, bool]] = {
    Opcode.LDXR: ("ldxr", False),
    Opcode.LDXP: ("ldxp", True),
    Opcode.LDAXR: ("ldaxr", False),
    Opcode.LDAXP: ("ldaxp", True),
    Opcode.LDLAR: ("ldlar", False),
    Opcode.LDAR: ("ldar", False),
}

# opcode -> (mnemonic, pair form, index of the transferred register)
_EXCLUSIVE_STORES: Dict[Opcode, Tuple[str, bool, int]] = {
    Opcode.STXR: ("stxr", False, 1),
    Opcode.STXP: ("stxp", True, 1),
    Opcode.STLXR: ("stlxr", False, 1),
    Opcode.STLXP: ("stlxp", True, 1),
    # no status register
    Opcode.STLLR: ("stllr", False, 0),
    Opcode.STLR: ("stlr", False, 0),
}


def _size_suffix(bits: int) -> str:
    if bits == 8:
        return "b"
    if bits == 16:
        return "h"
    return ""


def render_load_store_exclusive(insn: Instruction) -> List[Token]:
    if insn.opcode in _EXCLUSIVE_LOADS:
        mnemonic, pair = _EXCLUSIVE_LOADS[insn.opcode]
        transfer = 0
    elif insn.opcode in _EXCLUSIVE_STORES:
        mnemonic, pair, transfer = _EXCLUSIVE_STORES[insn.opcode]
    else:
        raise unhandled(insn, Family.LOAD_STORE_EXCLUSIVE.value)

    size = operand_at(insn, transfer, Register).width()
    if not pair:
        mnemonic += _size_suffix(size)
    return instr(mnemonic, *insn.operands)


_LOAD_LITERAL: Dict[Opcode, str] = {
    Opcode.LDR_LITERAL: "ldr",
    Opcode.LDRS_LITERAL: "ldrsw",
}


def render_load_literal(insn: Instruction) -> List[Token]:
    require_arity(insn, 2)
    address = operand_at(insn, 1, ImmediateOffset)
    if insn.opcode == Opcode.PRFM_LITERAL:
        prfop = operand_at(insn, 0, Immediate)
        return instr("prfm", prefetch_tokens(prfop.value), address.offset.render_signed())
    if insn.opcode in _LOAD_LITERAL:
        rt = operand_at(insn, 0, Register)
        return instr(_LOAD_LITERAL[insn.opcode], rt, address.offset.render_signed())
    raise unhandled(insn, Family.LOAD_LITERAL.value)


_LOAD_STORE_PAIR: Dict[Opcode, str] = {
    Opcode.LDP: "ldp",
    Opcode.LDPSW: "ldpsw",
    Opcode.LDNP: "ldnp",
    Opcode.STP: "stp",
    Opcode.STNP: "stnp",
}


def render_load_store_pair(insn: Instruction) -> List[Token]:
    require_arity(insn, 3)
    mnemonic = _LOAD_STORE_PAIR.get(insn.opcode)
    if mnemonic is None:
        raise unhandled(insn, Family.LOAD_STORE_PAIR.value)
    return instr(mnemonic, *insn.operands)


_LOAD_STORE: Dict[Opcode, str] = {
    Opcode.LDR: "ldr",
    Opcode.LDUR: "ldur",
    Opcode.LDTR: "ldtr",
    Opcode.LDRS: "ldrs",
    Opcode.LDURS: "ldurs",
    Opcode.LDTRS: "ldtrs",
    Opcode.STR: "str",
    Opcode.STUR: "stur",
    Opcode.STTR: "sttr",
}

_SIGNED_LOADS = {Opcode.LDRS, Opcode.LDURS, Opcode.LDTRS}


def _address_width(insn: Instruction) -> int:
    address = insn.operands[1]
    if not isinstance(address, (ImmediateOffset, RegisterOffset)):
        raise RenderContractError(
            f"{insn.name()}: expected ImmediateOffset or RegisterOffset at operand 1, "
            f"got {type(address).__name__}"
        )
    return address.width()


def render_load_store(insn: Instruction) -> List[Token]:
    require_arity(insn, 2)
    size = _address_width(insn)
    address = insn.operands[1]

    if insn.opcode == Opcode.PRFM:
        prfop = operand_at(insn, 0, Immediate)
        return instr("prfm", prefetch_tokens(prfop.value), address)

    mnemonic = _LOAD_STORE.get(insn.opcode)
    if mnemonic is None:
        raise unhandled(insn, Family.LOAD_STORE.value)
    if size == 32 and insn.opcode in _SIGNED_LOADS:
        mnemonic += "w"
    else:
        mnemonic += _size_suffix(size)
    return instr(mnemonic, *insn.operands)


__all__ = [
    "render_load_store_exclusive",
    "render_load_literal",
    "render_load_store_pair",
    "render_load_store",
]
