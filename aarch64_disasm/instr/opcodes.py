"""Opcode enumeration grouped by encoding family.

The numeric order matters: every family occupies one contiguous, inclusive
range of values, and the ranges follow each other in the order of
:class:`Family`. ``FAMILY_RANGES`` records the bounds explicitly and
``family_of`` looks them up; ``tests/prop/test_opcode_ranges.py`` checks the
ranges tile the whole enumeration.
"""

from __future__ import annotations

import bisect
import enum
from enum import IntEnum
from typing import Dict, List, Optional, Tuple


class Family(enum.Enum):
    PC_RELATIVE_ADDRESSING = "pc_relative_addressing"
    ADD_SUBTRACT_IMMEDIATE = "add_subtract_immediate"
    LOGICAL_IMMEDIATE = "logical_immediate"
    MOVE_WIDE_IMMEDIATE = "move_wide_immediate"
    BITFIELD = "bitfield"
    EXTRACT = "extract"
    CONDITIONAL_BRANCH = "conditional_branch"
    EXCEPTION_GENERATION = "exception_generation"
    SYSTEM = "system"
    BRANCH_REGISTER = "branch_register"
    BRANCH_IMMEDIATE = "branch_immediate"
    COMPARE_AND_BRANCH = "compare_and_branch"
    TEST_AND_BRANCH = "test_and_branch"
    LOAD_STORE_EXCLUSIVE = "load_store_exclusive"
    LOAD_LITERAL = "load_literal"
    LOAD_STORE_PAIR = "load_store_pair"
    LOAD_STORE = "load_store"
    DATA_PROCESSING_TWO_SOURCE = "data_processing_two_source"
    DATA_PROCESSING_ONE_SOURCE = "data_processing_one_source"
    LOGICAL_SHIFTED_REGISTER = "logical_shifted_register"
    ADD_SUBTRACT_SHIFTED_REGISTER = "add_subtract_shifted_register"
    ADD_SUBTRACT_EXTENDED_REGISTER = "add_subtract_extended_register"
    ADD_SUBTRACT_WITH_CARRY = "add_subtract_with_carry"
    CONDITIONAL_COMPARE = "conditional_compare"
    CONDITIONAL_SELECT = "conditional_select"
    DATA_PROCESSING_THREE_SOURCE = "data_processing_three_source"


class Opcode(IntEnum):
    # PC-relative addressing
    ADR = enum.auto()
    ADRP = enum.auto()

    # Add/subtract (immediate)
    ADD_IMMEDIATE = enum.auto()
    SUB_IMMEDIATE = enum.auto()

    # Logical (immediate)
    AND_IMMEDIATE = enum.auto()
    ORR_IMMEDIATE = enum.auto()
    EOR_IMMEDIATE = enum.auto()

    # Move wide (immediate)
    MOVN = enum.auto()
    MOVK = enum.auto()
    MOVZ = enum.auto()

    # Bitfield
    SBFM = enum.auto()
    BFM = enum.auto()
    UBFM = enum.auto()

    # Extract
    EXTR = enum.auto()

    # Conditional branch (immediate)
    B_COND = enum.auto()

    # Exception generation
    BRK = enum.auto()
    DCPS1 = enum.auto()
    DCPS2 = enum.auto()
    DCPS3 = enum.auto()
    HLT = enum.auto()
    HVC = enum.auto()
    SMC = enum.auto()
    SVC = enum.auto()

    # System
    AUTIA1716 = enum.auto()
    AUTIASP = enum.auto()
    AUTIAZ = enum.auto()
    AUTIB1716 = enum.auto()
    AUTIBSP = enum.auto()
    AUTIBZ = enum.auto()
    CLREX = enum.auto()
    DMB = enum.auto()
    DSB = enum.auto()
    ESB = enum.auto()
    HINT = enum.auto()
    ISB = enum.auto()
    MRS = enum.auto()
    MSR = enum.auto()
    NOP = enum.auto()
    PACIA1716 = enum.auto()
    PACIASP = enum.auto()
    PACIAZ = enum.auto()
    PACIB1716 = enum.auto()
    PACIBSP = enum.auto()
    PACIBZ = enum.auto()
    PSB_CSYNC = enum.auto()
    SEV = enum.auto()
    SEVL = enum.auto()
    SYS = enum.auto()
    SYSL = enum.auto()
    WFE = enum.auto()
    WFI = enum.auto()
    XPACLRI = enum.auto()
    YIELD = enum.auto()

    # Unconditional branch (register)
    BLR = enum.auto()
    BLRAA = enum.auto()
    BLRAAZ = enum.auto()
    BLRAB = enum.auto()
    BLRABZ = enum.auto()
    BR = enum.auto()
    BRAA = enum.auto()
    BRAAZ = enum.auto()
    BRAB = enum.auto()
    BRABZ = enum.auto()
    DRPS = enum.auto()
    ERET = enum.auto()
    ERETAA = enum.auto()
    ERETAB = enum.auto()
    RET = enum.auto()
    RETAA = enum.auto()
    RETAB = enum.auto()

    # Unconditional branch (immediate)
    B = enum.auto()
    BL = enum.auto()

    # Compare and branch (immediate)
    CBNZ = enum.auto()
    CBZ = enum.auto()

    # Test and branch (immediate)
    TBNZ = enum.auto()
    TBZ = enum.auto()

    # Load/store exclusive; loads first so ``opcode <= LDXR`` picks them out
    LDAR = enum.auto()
    LDAXP = enum.auto()
    LDAXR = enum.auto()
    LDLAR = enum.auto()
    LDXP = enum.auto()
    LDXR = enum.auto()
    STLLR = enum.auto()
    STLR = enum.auto()
    STLXP = enum.auto()
    STLXR = enum.auto()
    STXP = enum.auto()
    STXR = enum.auto()

    # Load register (literal)
    LDR_LITERAL = enum.auto()
    LDRS_LITERAL = enum.auto()
    PRFM_LITERAL = enum.auto()

    # Load/store pair
    LDNP = enum.auto()
    LDP = enum.auto()
    LDPSW = enum.auto()
    STNP = enum.auto()
    STP = enum.auto()

    # Load/store register
    LDR = enum.auto()
    LDRS = enum.auto()
    LDTR = enum.auto()
    LDTRS = enum.auto()
    LDUR = enum.auto()
    LDURS = enum.auto()
    PRFM = enum.auto()
    STR = enum.auto()
    STTR = enum.auto()
    STUR = enum.auto()

    # Data-processing (2 source)
    ASR = enum.auto()
    CRC32B = enum.auto()
    CRC32CB = enum.auto()
    CRC32CH = enum.auto()
    CRC32CW = enum.auto()
    CRC32CX = enum.auto()
    CRC32H = enum.auto()
    CRC32W = enum.auto()
    CRC32X = enum.auto()
    LSL = enum.auto()
    LSR = enum.auto()
    PACGA = enum.auto()
    ROR = enum.auto()
    SDIV = enum.auto()
    UDIV = enum.auto()

    # Data-processing (1 source)
    AUTDA = enum.auto()
    AUTDB = enum.auto()
    AUTIA = enum.auto()
    AUTIB = enum.auto()
    CLS = enum.auto()
    CLZ = enum.auto()
    PACDA = enum.auto()
    PACDB = enum.auto()
    PACIA = enum.auto()
    PACIB = enum.auto()
    RBIT = enum.auto()
    REV = enum.auto()
    REV16 = enum.auto()
    REV32 = enum.auto()
    XPACD = enum.auto()
    XPACI = enum.auto()

    # Logical (shifted register)
    AND_SHIFTED_REGISTER = enum.auto()
    BIC_SHIFTED_REGISTER = enum.auto()
    EOR_SHIFTED_REGISTER = enum.auto()
    ORN_SHIFTED_REGISTER = enum.auto()
    ORR_SHIFTED_REGISTER = enum.auto()
    EON_SHIFTED_REGISTER = enum.auto()

    # Add/subtract (shifted register)
    ADD_SHIFTED_REGISTER = enum.auto()
    SUB_SHIFTED_REGISTER = enum.auto()

    # Add/subtract (extended register)
    ADD_EXTENDED_REGISTER = enum.auto()
    SUB_EXTENDED_REGISTER = enum.auto()

    # Add/subtract (with carry)
    ADC = enum.auto()
    SBC = enum.auto()

    # Conditional compare
    CCMN = enum.auto()
    CCMP = enum.auto()

    # Conditional select
    CSEL = enum.auto()
    CSINC = enum.auto()
    CSINV = enum.auto()
    CSNEG = enum.auto()

    # Data-processing (3 source)
    MADD = enum.auto()
    MSUB = enum.auto()
    SMADDL = enum.auto()
    SMSUBL = enum.auto()
    SMULH = enum.auto()
    UMADDL = enum.auto()
    UMULH = enum.auto()
    UMSUBL = enum.auto()


# Inclusive upper bound of each family, in dispatch order.
FAMILY_UPPER_BOUNDS: Tuple[Tuple[Opcode, Family], ...] = (
    (Opcode.ADRP, Family.PC_RELATIVE_ADDRESSING),
    (Opcode.SUB_IMMEDIATE, Family.ADD_SUBTRACT_IMMEDIATE),
    (Opcode.EOR_IMMEDIATE, Family.LOGICAL_IMMEDIATE),
    (Opcode.MOVZ, Family.MOVE_WIDE_IMMEDIATE),
    (Opcode.UBFM, Family.BITFIELD),
    (Opcode.EXTR, Family.EXTRACT),
    (Opcode.B_COND, Family.CONDITIONAL_BRANCH),
    (Opcode.SVC, Family.EXCEPTION_GENERATION),
    (Opcode.YIELD, Family.SYSTEM),
    (Opcode.RETAB, Family.BRANCH_REGISTER),
    (Opcode.BL, Family.BRANCH_IMMEDIATE),
    (Opcode.CBZ, Family.COMPARE_AND_BRANCH),
    (Opcode.TBZ, Family.TEST_AND_BRANCH),
    (Opcode.STXR, Family.LOAD_STORE_EXCLUSIVE),
    (Opcode.PRFM_LITERAL, Family.LOAD_LITERAL),
    (Opcode.STP, Family.LOAD_STORE_PAIR),
    (Opcode.STUR, Family.LOAD_STORE),
    (Opcode.UDIV, Family.DATA_PROCESSING_TWO_SOURCE),
    (Opcode.XPACI, Family.DATA_PROCESSING_ONE_SOURCE),
    (Opcode.EON_SHIFTED_REGISTER, Family.LOGICAL_SHIFTED_REGISTER),
    (Opcode.SUB_SHIFTED_REGISTER, Family.ADD_SUBTRACT_SHIFTED_REGISTER),
    (Opcode.SUB_EXTENDED_REGISTER, Family.ADD_SUBTRACT_EXTENDED_REGISTER),
    (Opcode.SBC, Family.ADD_SUBTRACT_WITH_CARRY),
    (Opcode.CCMP, Family.CONDITIONAL_COMPARE),
    (Opcode.CSNEG, Family.CONDITIONAL_SELECT),
    (Opcode.UMSUBL, Family.DATA_PROCESSING_THREE_SOURCE),
)

_UPPER_VALUES: List[int] = [int(bound) for bound, _ in FAMILY_UPPER_BOUNDS]

FIRST_OPCODE = min(Opcode)
LAST_OPCODE = max(Opcode)


def _build_ranges() -> Dict[Family, Tuple[Opcode, Opcode]]:
    ranges: Dict[Family, Tuple[Opcode, Opcode]] = {}
    lower = int(FIRST_OPCODE)
    for upper, family in FAMILY_UPPER_BOUNDS:
        ranges[family] = (Opcode(lower), upper)
        lower = int(upper) + 1
    return ranges


# Inclusive (first, last) opcode of every family.
FAMILY_RANGES: Dict[Family, Tuple[Opcode, Opcode]] = _build_ranges()


def family_of(opcode: int) -> Optional[Family]:
    """Return the encoding family of ``opcode``.

    Values below the first opcode or past the last family bound have no
    family and yield ``None``.
    """
    if opcode < FIRST_OPCODE:
        return None
    index = bisect.bisect_left(_UPPER_VALUES, opcode)
    if index == len(_UPPER_VALUES):
        return None
    return FAMILY_UPPER_BOUNDS[index][1]


def opcodes_in(family: Family) -> List[Opcode]:
    first, last = FAMILY_RANGES[family]
    return [op for op in Opcode if first <= op <= last]


__all__ = [
    "Family",
    "Opcode",
    "FAMILY_UPPER_BOUNDS",
    "FAMILY_RANGES",
    "FIRST_OPCODE",
    "LAST_OPCODE",
    "family_of",
    "opcodes_in",
]
