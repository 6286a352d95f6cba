from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import List, Protocol, Union, runtime_checkable

from ..constants import (
    MASK64,
    UNSUPPORTED_OPERAND,
    UNSUPPORTED_REGISTER,
    W_REGISTER_BITS,
    mask_for_width,
)
from ..tokens import TBegMem, TEndMem, TInt, TReg, TSep, TText, Token, asm_str


@runtime_checkable
class HasWidth(Protocol):
    def width(self) -> int: ...


class RegisterName(IntEnum):
    X0 = 0
    X1 = 1
    X2 = 2
    X3 = 3
    X4 = 4
    X5 = 5
    X6 = 6
    X7 = 7
    X8 = 8
    X9 = 9
    X10 = 10
    X11 = 11
    X12 = 12
    X13 = 13
    X14 = 14
    X15 = 15
    X16 = 16
    X17 = 17
    X18 = 18
    X19 = 19
    X20 = 20
    X21 = 21
    X22 = 22
    X23 = 23
    X24 = 24
    X25 = 25
    X26 = 26
    X27 = 27
    X28 = 28
    X29 = 29
    X30 = 30
    XZR = 31
    SP = 32
    PC = 33


# procedure call standard names
LINK_REGISTER = RegisterName.X30
FRAME_REGISTER = RegisterName.X29


class SystemRegisterName(Enum):
    UNKNOWN = "unknown"
    SPSEL = "SPSel"
    DAIFSET = "DAIFSet"
    DAIFCLR = "DAIFClr"
    UAO = "UAO"
    PAN = "PAN"


class ShiftType(Enum):
    NONE = "none"
    LSL = "lsl"
    LSR = "lsr"
    ASR = "asr"
    ROR = "ror"


class ExtendType(Enum):
    NONE = "none"
    UXTB = "uxtb"
    UXTH = "uxth"
    UXTW = "uxtw"
    UXTX = "uxtx"
    SXTB = "sxtb"
    SXTH = "sxth"
    SXTW = "sxtw"
    SXTX = "sxtx"
    LSL = "lsl"


class Operand:
    """Base of the closed operand set; subclasses render themselves."""

    __slots__ = ()

    def render(self) -> List[Token]:
        return [TText(UNSUPPORTED_OPERAND)]

    def __str__(self) -> str:
        return asm_str(self.render())


def register_text(name: int, size: int) -> str:
    if RegisterName.X0 <= name <= RegisterName.XZR:
        prefix = "w" if size <= W_REGISTER_BITS else "x"
        if name == RegisterName.XZR:
            return prefix + "zr"
        return f"{prefix}{int(name) - RegisterName.X0}"
    if name == RegisterName.SP:
        return "wsp" if size <= W_REGISTER_BITS else "sp"
    if name == RegisterName.PC:
        return "pc"
    return UNSUPPORTED_REGISTER


@dataclass(frozen=True, slots=True)
class Register(Operand):
    name: int
    size: int = 64

    def width(self) -> int:
        return self.size

    def is_zero(self) -> bool:
        return self.name == RegisterName.XZR

    def is_sp(self) -> bool:
        return self.name == RegisterName.SP

    def render(self) -> List[Token]:
        return [TReg(register_text(self.name, self.size))]


@dataclass(frozen=True, slots=True)
class Immediate(Operand):
    value: int
    size: int = 64

    def __post_init__(self) -> None:
        if not 0 <= self.value <= MASK64:
            raise ValueError(f"Immediate out of range: {self.value:#x}")
        if not 0 < self.size <= 64:
            raise ValueError(f"Immediate width out of range: {self.size}")

    def width(self) -> int:
        return self.size

    def is_negative(self) -> bool:
        return bool(self.value >> (self.size - 1) & 1)

    def signed_value(self) -> int:
        field_value = self.value & mask_for_width(self.size)
        if self.is_negative():
            return field_value - (1 << self.size)
        return field_value

    def render(self) -> List[Token]:
        return [TInt(f"#{self.value:#x}")]

    def render_signed(self) -> List[Token]:
        value = self.signed_value()
        if value < 0:
            return [TInt(f"#-{-value:#x}")]
        return [TInt(f"#{value:#x}")]

    def render_decimal(self) -> List[Token]:
        return [TInt(f"#{self.value}")]


@dataclass(frozen=True, slots=True)
class SystemRegister(Operand):
    name: SystemRegisterName
    op0: int = 0
    op1: int = 0
    crn: int = 0
    crm: int = 0
    op2: int = 0

    def generic_name(self) -> str:
        return f"S{self.op0}_{self.op1}_C{self.crn}_C{self.crm}_{self.op2}"

    def render(self) -> List[Token]:
        if not isinstance(self.name, SystemRegisterName) or (
            self.name is SystemRegisterName.UNKNOWN
        ):
            return [TReg(self.generic_name())]
        return [TReg(self.name.value)]


@dataclass(frozen=True, slots=True)
class Shift(Operand):
    type: ShiftType = ShiftType.NONE
    count: int = 0

    def render(self) -> List[Token]:
        if self.type is ShiftType.NONE:
            return []
        if not isinstance(self.type, ShiftType):
            return [TSep(", "), TText(UNSUPPORTED_OPERAND)]
        return [TSep(", "), TText(self.type.value), TSep(" "), TInt(f"#{self.count:#x}")]


@dataclass(frozen=True, slots=True)
class Extend(Operand):
    type: ExtendType = ExtendType.NONE
    count: int = 0

    def render(self) -> List[Token]:
        if self.type is ExtendType.NONE:
            return []
        if not isinstance(self.type, ExtendType):
            return [TSep(", "), TText(UNSUPPORTED_OPERAND)]
        # a zero LSL is the plain register-offset idiom
        if self.type is ExtendType.LSL and not self.count:
            return []
        tokens: List[Token] = [TSep(", "), TText(self.type.value)]
        if self.count:
            tokens += [TSep(", "), TInt(f"#{self.count}")]
        return tokens


def _render_address(
    base: Register,
    offset_tokens: List[Token],
    writeback: bool,
    post_index: bool,
) -> List[Token]:
    post = writeback and post_index
    tokens: List[Token] = [TBegMem(), *base.render()]
    if post:
        tokens.append(TEndMem())
    if offset_tokens:
        tokens.append(TSep(", "))
        tokens += offset_tokens
    if not post:
        tokens.append(TEndMem(writeback))
    return tokens


@dataclass(frozen=True, slots=True)
class ImmediateOffset(Operand):
    base: Register
    offset: Immediate
    shift: Shift = field(default_factory=Shift)
    writeback: bool = False
    post_index: bool = False
    size: int = 64

    def width(self) -> int:
        return self.size

    def render(self) -> List[Token]:
        offset_tokens: List[Token] = []
        if self.offset.value or self.writeback:
            offset_tokens = self.offset.render_signed() + self.shift.render()
        return _render_address(self.base, offset_tokens, self.writeback, self.post_index)


@dataclass(frozen=True, slots=True)
class RegisterOffset(Operand):
    base: Register
    offset: Register
    extend: Extend = field(default_factory=Extend)
    writeback: bool = False
    post_index: bool = False
    size: int = 64

    def width(self) -> int:
        return self.size

    def render(self) -> List[Token]:
        offset_tokens = self.offset.render() + self.extend.render()
        return _render_address(self.base, offset_tokens, self.writeback, self.post_index)


AnyOperand = Union[
    Register,
    Immediate,
    SystemRegister,
    Shift,
    Extend,
    ImmediateOffset,
    RegisterOffset,
]


def render_operand(operand: object) -> List[Token]:
    if isinstance(operand, Operand):
        return operand.render()
    return [TText(UNSUPPORTED_OPERAND)]
