from __future__ import annotations

import os

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from aarch64_disasm import Family, Instruction, Opcode, render_tokens
from aarch64_disasm.tokens import TInstr

from .strategies import family_scenarios

FAST_MAX_EXAMPLES = int(os.getenv("AARCH64_PROP_EXAMPLES", "300"))

ADD_SUB_FAMILIES = [
    Family.ADD_SUBTRACT_IMMEDIATE,
    Family.ADD_SUBTRACT_SHIFTED_REGISTER,
    Family.ADD_SUBTRACT_EXTENDED_REGISTER,
]

SUBTRACTS = {
    Opcode.SUB_IMMEDIATE,
    Opcode.SUB_SHIFTED_REGISTER,
    Opcode.SUB_EXTENDED_REGISTER,
}

# every mnemonic an add/sub encoding may print as
ALIAS_CLASSES = {
    "add": "plain",
    "adds": "plain",
    "sub": "plain",
    "subs": "plain",
    "cmp": "compare",
    "cmn": "compare",
    "neg": "negate",
    "negs": "negate",
    "mov": "move",
}


def expected_mnemonic(insn: Instruction, family: Family) -> str:
    rd, rn = insn.operands[0], insn.operands[1]
    sub = insn.opcode in SUBTRACTS
    base = "sub" if sub else "add"
    plain = base + ("s" if insn.set_flags else "")
    compare = "cmp" if sub else "cmn"

    if family is Family.ADD_SUBTRACT_IMMEDIATE:
        imm = insn.operands[2]
        if imm.value == 0 and ((not insn.set_flags and rd.is_sp()) or rn.is_sp()):
            return "mov"
        if rd.is_zero():
            return compare
        return plain

    if insn.set_flags and rd.is_zero():
        return compare
    if family is Family.ADD_SUBTRACT_SHIFTED_REGISTER and sub and rn.is_zero():
        return "negs" if insn.set_flags else "neg"
    return plain


@pytest.mark.parametrize("family", ADD_SUB_FAMILIES, ids=lambda f: f.value)
@given(data=st.data())
@settings(
    max_examples=FAST_MAX_EXAMPLES,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
def test_add_subtract_alias_choice(family, data) -> None:
    scenario = data.draw(family_scenarios(family))
    tokens = render_tokens(scenario.insn)
    assert isinstance(tokens[0], TInstr)
    mnemonic = str(tokens[0])
    assert mnemonic in ALIAS_CLASSES, scenario.text()
    assert mnemonic == expected_mnemonic(scenario.insn, family), scenario.description
    # the same instruction always picks the same form
    assert render_tokens(scenario.insn) == tokens
