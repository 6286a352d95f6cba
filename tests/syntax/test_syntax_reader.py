from __future__ import annotations

import pytest
from lark import exceptions as lark_exceptions

from aarch64_disasm.syntax import AsmLine, AsmSyntaxError, Memory, Term, equivalent, parse_line


def test_parse_simple_line() -> None:
    line = parse_line("add x0, x1, #0x10, lsl #0xc")
    assert line == AsmLine(
        "add",
        (Term("x0"), Term("x1"), Term(value=16), Term("lsl", 12)),
    )
    assert str(line) == "add x0, x1, #16, lsl #12"


def test_parse_bare_mnemonics() -> None:
    assert parse_line("nop") == AsmLine("nop")
    assert parse_line("  RET  ") == AsmLine("ret")
    assert parse_line("psb csync") == AsmLine("psb", (Term("csync"),))


def test_parse_memory_operands() -> None:
    assert parse_line("ldr x0, [x1, #0x10]!") == AsmLine(
        "ldr", (Term("x0"), Memory((Term("x1"), Term(value=16)), writeback=True))
    )
    assert parse_line("ldp x0, x1, [sp], #0x10") == AsmLine(
        "ldp", (Term("x0"), Term("x1"), Memory((Term("sp"),)), Term(value=16))
    )


def test_signed_and_decimal_immediates() -> None:
    assert parse_line("b #-0x1").operands == (Term(value=-1),)
    assert parse_line("svc #0").operands == (Term(value=0),)
    assert parse_line("b.eq 0x20").operands == (Term(value=32),)
    assert parse_line("b.ne #+16").mnemonic == "b.ne"


def test_extend_amount_is_merged() -> None:
    rendered = parse_line("add x0, x1, w2, uxtw, #2")
    reference = parse_line("add x0, x1, w2, uxtw #2")
    assert rendered == reference
    assert rendered.operands[-1] == Term("uxtw", 2)
    assert equivalent("ldr x0, [x1, x2, lsl, #3]", "ldr x0, [x1, x2, lsl #3]")


def test_keyword_without_amount_is_kept() -> None:
    line = parse_line("cmp x1, w2, sxtw")
    assert line.operands[-1] == Term("sxtw")


def test_equivalence_ignores_case_and_radix() -> None:
    assert equivalent("msr SPSel, x3", "MSR spsel, X3")
    assert equivalent("stp x29, x30, [sp, #-0x10]!", "stp fp, lr, [sp, #-16]!")
    assert equivalent("prfm PLDL1KEEP, [x1]", "prfm pldl1keep, [x1]")
    assert equivalent(parse_line("mov x0, #0xff"), "mov x0, #255")
    assert not equivalent("mov x0, #0xff", "mov x0, #0xfe")
    assert not equivalent("ldr x0, [x1, #0x10]!", "ldr x0, [x1, #0x10]")


def test_placeholders_parse() -> None:
    assert parse_line("<unsupported_insn>") == AsmLine("<unsupported_insn>")
    assert parse_line("mov x0, <unsupported_reg>").operands[-1] == Term("<unsupported_reg>")


@pytest.mark.parametrize("text", ["", "add x0 x1", "ldr x0, [x1", "add x0,, x1", "#1"])
def test_syntax_errors(text) -> None:
    with pytest.raises(AsmSyntaxError) as excinfo:
        parse_line(text)
    assert isinstance(excinfo.value, ValueError)
    assert isinstance(excinfo.value.__cause__, lark_exceptions.UnexpectedInput)
    assert excinfo.value.text == text
