from .tokens import TBegMem, TEndMem, TInstr, TInt, TReg, TSep, TText, TokenKind, asm_str


def test_asm_str_joins_tokens() -> None:
    tokens = [
        TInstr("ldr"),
        TSep(" "),
        TReg("x0"),
        TSep(", "),
        TBegMem(),
        TReg("x1"),
        TSep(", "),
        TInt("#0x10"),
        TEndMem(writeback=True),
    ]
    assert asm_str(tokens) == "ldr x0, [x1, #0x10]!"


def test_token_equality_is_by_type_and_value() -> None:
    assert TReg("x0") == TReg("x0")
    assert TReg("x0") != TText("x0")
    assert TEndMem() != TEndMem(writeback=True)
    assert TBegMem() == TBegMem()
    assert len({TInt("#1"), TInt("#1"), TInt("#2")}) == 2


def test_token_kinds() -> None:
    assert TInstr("nop").kind is TokenKind.INSTRUCTION
    assert TEndMem().kind is TokenKind.END_MEMORY
    assert repr(TInt("#0x1")) == "TInt(#0x1)"
