from __future__ import annotations

from typing import Iterable, List, Union

from ..constants import (
    BARRIER_ACCESS,
    BARRIER_DOMAINS,
    CONDITION_CODE_NAMES,
    PREFETCH_POLICIES,
    PREFETCH_TARGET_MASK,
    PREFETCH_TARGETS,
    PREFETCH_TYPE_MASK,
    PREFETCH_TYPES,
)
from ..instr.operands import Extend, Operand, Shift
from ..tokens import TInstr, TInt, TSep, TText, Token

OperandLike = Union[Operand, List[Token]]


def _is_modifier(part: OperandLike) -> bool:
    # shifts and extends print their own leading ", "
    return isinstance(part, (Shift, Extend))


def _tokens_of(part: OperandLike) -> List[Token]:
    if isinstance(part, Operand):
        return part.render()
    return list(part)


def join_operands(parts: Iterable[OperandLike]) -> List[Token]:
    tokens: List[Token] = []
    for index, part in enumerate(parts):
        if index != 0 and not _is_modifier(part):
            tokens.append(TSep(", "))
        tokens += _tokens_of(part)
    return tokens


def instr(mnemonic: str, *parts: OperandLike) -> List[Token]:
    """Assemble ``mnemonic`` followed by its comma-separated operands."""
    tokens: List[Token] = [TInstr(mnemonic)]
    if parts:
        tokens.append(TSep(" "))
        tokens += join_operands(parts)
    return tokens


def cond_tokens(cc: int) -> List[Token]:
    return [TText(CONDITION_CODE_NAMES[int(cc) & 0xF])]


def decimal(value: int) -> List[Token]:
    return [TInt(f"#{value}")]


def sysreg_field(prefix: str, value: int) -> List[Token]:
    return [TText(f"{prefix}{value}")]


def barrier_tokens(option: int) -> List[Token]:
    """Render a DMB/DSB CRm option, falling back to ``#<raw>``."""
    access = option & 0b11
    if option > 0b1111 or access not in BARRIER_ACCESS:
        return decimal(option)
    return [TText(BARRIER_DOMAINS[option >> 2] + BARRIER_ACCESS[access])]


def prefetch_tokens(prfop: int) -> List[Token]:
    """Render a PRFM prfop field, falling back to ``#<raw>``."""
    kind = prfop & PREFETCH_TYPE_MASK
    target = prfop & PREFETCH_TARGET_MASK
    if prfop > 0b11111 or kind not in PREFETCH_TYPES or target not in PREFETCH_TARGETS:
        return decimal(prfop)
    name = PREFETCH_TYPES[kind] + PREFETCH_TARGETS[target] + PREFETCH_POLICIES[prfop & 1]
    return [TText(name)]
