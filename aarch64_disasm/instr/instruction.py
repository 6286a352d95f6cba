from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Tuple, Type, TypeVar

from .opcodes import Opcode
from .operands import Operand

T = TypeVar("T", bound=Operand)


class RenderContractError(Exception):
    """The decoder handed the renderer an instruction it cannot have produced.

    Raised for a wrong operand variant at a fixed position, a wrong operand
    count, or an opcode that none of its family's arms handles. It signals
    that decoder and renderer disagree and must not be caught to "recover".
    """


class ConditionCode(IntEnum):
    EQ = 0
    NE = 1
    CS = 2
    CC = 3
    MI = 4
    PL = 5
    VS = 6
    VC = 7
    HI = 8
    LS = 9
    GE = 10
    LT = 11
    GT = 12
    LE = 13
    AL = 14
    NV = 15

    # architectural synonyms
    HS = 2
    LO = 3


@dataclass(frozen=True, slots=True)
class Instruction:
    opcode: Opcode
    operands: Tuple[Operand, ...] = field(default_factory=tuple)
    set_flags: bool = False
    cc: ConditionCode = ConditionCode.AL

    def __post_init__(self) -> None:
        if not isinstance(self.operands, tuple):
            object.__setattr__(self, "operands", tuple(self.operands))

    def name(self) -> str:
        opcode = self.opcode
        return opcode.name if isinstance(opcode, Opcode) else f"opcode {opcode}"


def _describe(insn: Instruction) -> str:
    return f"{insn.name()} with {len(insn.operands)} operand(s)"


def operand_at(insn: Instruction, index: int, kind: Type[T]) -> T:
    """Fetch operand ``index`` and check it is a ``kind``."""
    if index >= len(insn.operands):
        raise RenderContractError(
            f"{_describe(insn)}: expected {kind.__name__} at operand {index}"
        )
    operand = insn.operands[index]
    if not isinstance(operand, kind):
        raise RenderContractError(
            f"{_describe(insn)}: expected {kind.__name__} at operand {index}, "
            f"got {type(operand).__name__}"
        )
    return operand


def unpack(insn: Instruction, *kinds: Type[Operand]) -> Tuple[Any, ...]:
    """Check the operand list has exactly ``kinds`` and return it.

    The family renderers unpack into named locals, e.g.
    ``rd, rn, imm, shift = unpack(insn, Register, Register, Immediate, Shift)``.
    """
    if len(insn.operands) != len(kinds):
        raise RenderContractError(
            f"{_describe(insn)}: expected {len(kinds)} operand(s)"
        )
    return tuple(operand_at(insn, index, kind) for index, kind in enumerate(kinds))


def require_arity(insn: Instruction, count: int) -> None:
    if len(insn.operands) != count:
        raise RenderContractError(f"{_describe(insn)}: expected {count} operand(s)")


def unhandled(insn: Instruction, family: object) -> RenderContractError:
    return RenderContractError(f"{insn.name()} is not handled by the {family} renderer")


__all__ = [
    "ConditionCode",
    "Instruction",
    "RenderContractError",
    "operand_at",
    "require_arity",
    "unhandled",
    "unpack",
]
