"""Reader for single lines of UAL disassembly text.

Lines produced by :func:`aarch64_disasm.render` and lines produced by other
disassemblers differ in surface details: hex versus decimal immediates, case,
and whether an extend amount is written ``uxtw #2`` or ``uxtw, #2``.
:func:`parse_line` reduces a line to an :class:`AsmLine` in which those
differences are gone, so two lines can be compared with :func:`equivalent`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple, Union

from lark import Lark, Token, Transformer
from lark.exceptions import UnexpectedInput

grammar_path = os.path.join(os.path.dirname(__file__), "ual.lark")
with open(grammar_path, "r") as f:
    ual_grammar = f.read()

ual_parser = Lark(
    ual_grammar,
    start="line",
    parser="earley",
    lexer="basic",
    maybe_placeholders=False,
)

# operand keywords that take an amount
MODIFIER_KEYWORDS = frozenset(
    {
        "lsl",
        "lsr",
        "asr",
        "ror",
        "msl",
        "uxtb",
        "uxth",
        "uxtw",
        "uxtx",
        "sxtb",
        "sxth",
        "sxtw",
        "sxtx",
    }
)

# procedure call standard spellings
REGISTER_ALIASES = {"fp": "x29", "lr": "x30"}


class AsmSyntaxError(ValueError):
    def __init__(self, text: str, error: UnexpectedInput) -> None:
        self.text = text
        self.column = getattr(error, "column", None)
        super().__init__(f"cannot parse {text!r}: {error}")


@dataclass(frozen=True)
class Term:
    """A name, an immediate, or a keyword with its amount (``lsl #12``)."""

    name: Optional[str] = None
    value: Optional[int] = None

    def __str__(self) -> str:
        if self.name is None:
            return f"#{self.value}"
        if self.value is None:
            return self.name
        return f"{self.name} #{self.value}"


@dataclass(frozen=True)
class Memory:
    parts: Tuple[Term, ...]
    writeback: bool = False

    def __str__(self) -> str:
        inner = ", ".join(str(part) for part in self.parts)
        return f"[{inner}]" + ("!" if self.writeback else "")


AsmOperand = Union[Term, Memory]


@dataclass(frozen=True)
class AsmLine:
    mnemonic: str
    operands: Tuple[AsmOperand, ...] = ()

    def __str__(self) -> str:
        if not self.operands:
            return self.mnemonic
        return self.mnemonic + " " + ", ".join(str(op) for op in self.operands)


def _merge_modifiers(terms: List[Any]) -> List[Any]:
    """Fold a bare ``lsl``/``uxtw`` keyword into the immediate after it."""
    merged: List[Any] = []
    for item in terms:
        previous = merged[-1] if merged else None
        if (
            isinstance(item, Term)
            and item.name is None
            and isinstance(previous, Term)
            and previous.value is None
            and previous.name in MODIFIER_KEYWORDS
        ):
            merged[-1] = Term(previous.name, item.value)
            continue
        merged.append(item)
    return merged


class UalTransformer(Transformer):
    def line(self, items: List[Any]) -> AsmLine:
        mnemonic = str(items[0]).lower()
        return AsmLine(mnemonic, tuple(_merge_modifiers(items[1:])))

    def memory(self, items: List[Any]) -> Memory:
        writeback = False
        if items and isinstance(items[-1], Token) and items[-1].type == "WRITEBACK":
            writeback = True
            items = items[:-1]
        return Memory(tuple(_merge_modifiers(items)), writeback)

    def term(self, items: List[Any]) -> Term:
        name: Optional[str] = None
        value: Optional[int] = None
        for item in items:
            if isinstance(item, Token):
                name = str(item).lower()
                name = REGISTER_ALIASES.get(name, name)
            else:
                value = item
        return Term(name, value)

    def immediate(self, items: List[Token]) -> int:
        text = str(items[-1]).lower()
        return int(text, 16 if "0x" in text else 10)


def parse_line(text: str) -> AsmLine:
    """Parse one line of disassembly into its normalized form."""
    try:
        tree = ual_parser.parse(text.strip())
    except UnexpectedInput as e:
        raise AsmSyntaxError(text, e) from e
    return UalTransformer().transform(tree)


def equivalent(a: Union[str, AsmLine], b: Union[str, AsmLine]) -> bool:
    """Compare two disassembly lines after normalization."""
    left = parse_line(a) if isinstance(a, str) else a
    right = parse_line(b) if isinstance(b, str) else b
    return left == right


__all__ = [
    "AsmLine",
    "AsmOperand",
    "AsmSyntaxError",
    "Memory",
    "Term",
    "equivalent",
    "parse_line",
]
