"""Shared architecture constants for the AArch64 renderer.

This module centralizes the small lookup tables and bit masks used by the
operand renderers and the per-family alias rules.
"""

from typing import Tuple

# Condition code mnemonics indexed by the 4-bit ``cond`` field. Both 0b1110
# and 0b1111 mean "always"; the architecture reserves NV but it executes as AL.
CONDITION_CODE_NAMES: Tuple[str, ...] = (
    "eq",
    "ne",
    "cs",
    "cc",
    "mi",
    "pl",
    "vs",
    "vc",
    "hi",
    "ls",
    "ge",
    "lt",
    "gt",
    "le",
    "al",
    "al",
)

# Register operand widths. Anything at or below 32 bits uses the W view.
W_REGISTER_BITS = 32
X_REGISTER_BITS = 64

MASK32 = 0xFFFFFFFF
MASK64 = 0xFFFFFFFFFFFFFFFF

# ``imms`` values that select the whole register in bitfield moves.
FULL_WIDTH_IMMS = {W_REGISTER_BITS: 0b011111, X_REGISTER_BITS: 0b111111}

# (immr == 0, imms) pairs that turn a bitfield move into a sign/zero extension.
EXTEND_IMMS = {0b000111: "b", 0b001111: "h", 0b011111: "w"}

# ``ISB`` without an explicit option encodes SY (0b1111).
ISB_DEFAULT_OPTION = 0b1111

# Barrier option fields: CRm<3:2> is the shareability domain, CRm<1:0> the
# access types covered. Only the limited ld/st forms are named.
BARRIER_DOMAINS = ("os", "nsh", "ish", "")
BARRIER_ACCESS = {0b01: "ld", 0b10: "st"}

# PRFM prfop fields: <4:3> type, <2:1> target cache level, <0> policy.
PREFETCH_TYPES = {0b00000: "PLD", 0b01000: "PLI", 0b10000: "PST"}
PREFETCH_TARGETS = {0b00000: "L1", 0b00010: "L2", 0b00100: "L3"}
PREFETCH_POLICIES = ("KEEP", "STRM")
PREFETCH_TYPE_MASK = 0b11000
PREFETCH_TARGET_MASK = 0b00110

UNSUPPORTED_REGISTER = "<unsupported_reg>"
UNSUPPORTED_OPERAND = "<unsupported_opnd>"
UNSUPPORTED_INSTRUCTION = "<unsupported_insn>"


def mask_for_width(bits: int) -> int:
    """Return a mask covering ``bits`` low-order bits (at least one)."""
    return (1 << max(bits, 1)) - 1


def register_bits(size: int) -> int:
    """Collapse an operand width onto the 32/64-bit register view."""
    return W_REGISTER_BITS if size <= W_REGISTER_BITS else X_REGISTER_BITS
