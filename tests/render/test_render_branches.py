from __future__ import annotations

import pytest

from aarch64_disasm import (
    ConditionCode,
    Immediate,
    Instruction,
    Opcode,
    Register,
    RegisterName,
    RenderContractError,
    SystemRegister,
    SystemRegisterName,
    render,
)


def x(n: int) -> Register:
    return Register(RegisterName(n))


XZR = Register(RegisterName.XZR)
LR = Register(RegisterName.X30)


def test_conditional_branch() -> None:
    insn = Instruction(Opcode.B_COND, (Immediate(0x7FFFF, 19),), cc=ConditionCode.EQ)
    assert render(insn) == "b.eq #-0x1"
    insn = Instruction(Opcode.B_COND, (Immediate(0x20, 19),), cc=ConditionCode.HS)
    assert render(insn) == "b.cs #0x20"


@pytest.mark.parametrize("cc", [ConditionCode.AL, ConditionCode.NV])
def test_conditional_branch_always(cc) -> None:
    insn = Instruction(Opcode.B_COND, (Immediate(0x8, 19),), cc=cc)
    assert render(insn) == "b.al #0x8"


@pytest.mark.parametrize(
    "opcode,value,text",
    [
        (Opcode.SVC, 0, "svc #0"),
        (Opcode.BRK, 0x3E8, "brk #1000"),
        (Opcode.HVC, 1, "hvc #1"),
        (Opcode.SMC, 2, "smc #2"),
        (Opcode.HLT, 0xF000, "hlt #61440"),
        (Opcode.DCPS1, 0, "dcps1"),
        (Opcode.DCPS3, 0, "dcps3"),
    ],
)
def test_exception_generation(opcode, value, text) -> None:
    assert render(Instruction(opcode, (Immediate(value, 16),))) == text


@pytest.mark.parametrize(
    "opcode,text",
    [
        (Opcode.NOP, "nop"),
        (Opcode.YIELD, "yield"),
        (Opcode.WFI, "wfi"),
        (Opcode.SEVL, "sevl"),
        (Opcode.XPACLRI, "xpaclri"),
        (Opcode.PACIASP, "paciasp"),
        (Opcode.AUTIBSP, "autibsp"),
        (Opcode.PACIA1716, "pacia1716"),
        (Opcode.ESB, "esb"),
        (Opcode.PSB_CSYNC, "psb csync"),
        (Opcode.CLREX, "clrex"),
    ],
)
def test_bare_system(opcode, text) -> None:
    assert render(Instruction(opcode)) == text


def test_hint() -> None:
    assert render(Instruction(Opcode.HINT, (Immediate(0x22, 7),))) == "hint #0x22"


@pytest.mark.parametrize(
    "option,text",
    [
        (0b1110, "st"),
        (0b1101, "ld"),
        (0b1010, "ishst"),
        (0b1001, "ishld"),
        (0b0110, "nshst"),
        (0b0101, "nshld"),
        (0b0010, "osst"),
        (0b0001, "osld"),
        (0b1111, "#15"),
        (0b1011, "#11"),
        (0b0111, "#7"),
        (0b0011, "#3"),
        (0b0100, "#4"),
        (0b0000, "#0"),
    ],
)
def test_barriers(option, text) -> None:
    assert render(Instruction(Opcode.DMB, (Immediate(option, 4),))) == "dmb " + text
    assert render(Instruction(Opcode.DSB, (Immediate(option, 4),))) == "dsb " + text


def test_isb() -> None:
    assert render(Instruction(Opcode.ISB, (Immediate(0b1111, 4),))) == "isb"
    assert render(Instruction(Opcode.ISB, (Immediate(0b1110, 4),))) == "isb #14"


def sys_fields(op1: int, crn: int, crm: int, op2: int):
    return (
        Immediate(op1, 3),
        Immediate(crn, 4),
        Immediate(crm, 4),
        Immediate(op2, 3),
    )


def test_sys_and_sysl() -> None:
    assert render(Instruction(Opcode.SYS, (*sys_fields(0, 7, 5, 0), XZR))) == (
        "sys #0, C7, C5, #0"
    )
    assert render(Instruction(Opcode.SYS, (*sys_fields(3, 7, 11, 1), x(1)))) == (
        "sys #3, C7, C11, #1, x1"
    )
    assert render(Instruction(Opcode.SYSL, (x(0), *sys_fields(3, 7, 5, 0)))) == (
        "sysl x0, #3, C7, C5, #0"
    )


def test_msr_mrs() -> None:
    msr = Instruction(
        Opcode.MSR, (SystemRegister(SystemRegisterName.DAIFSET), Immediate(0xF, 4))
    )
    assert render(msr) == "msr DAIFSet, #0xf"
    msr = Instruction(Opcode.MSR, (SystemRegister(SystemRegisterName.SPSEL), x(3)))
    assert render(msr) == "msr SPSel, x3"
    tpidr = SystemRegister(SystemRegisterName.UNKNOWN, op0=3, op1=3, crn=13, crm=0, op2=2)
    assert render(Instruction(Opcode.MRS, (x(0), tpidr))) == "mrs x0, S3_3_C13_C0_2"


@pytest.mark.parametrize(
    "insn,text",
    [
        (Instruction(Opcode.RET, (LR,)), "ret"),
        (Instruction(Opcode.RET, (x(1),)), "ret x1"),
        (Instruction(Opcode.RETAA, (LR,)), "retaa"),
        (Instruction(Opcode.RETAB, (x(2),)), "retab x2"),
        (Instruction(Opcode.BR, (x(16),)), "br x16"),
        (Instruction(Opcode.BLR, (x(8),)), "blr x8"),
        (Instruction(Opcode.BRAAZ, (x(1),)), "braaz x1"),
        (Instruction(Opcode.BRABZ, (x(1),)), "brabz x1"),
        (Instruction(Opcode.BLRABZ, (x(3),)), "blrabz x3"),
        (Instruction(Opcode.BRAA, (x(1), x(2))), "braa x1, x2"),
        (Instruction(Opcode.BLRAB, (x(1), Register(RegisterName.SP))), "blrab x1, sp"),
        (Instruction(Opcode.ERET), "eret"),
        (Instruction(Opcode.ERETAA), "eretaa"),
        (Instruction(Opcode.ERETAB), "eretab"),
        (Instruction(Opcode.DRPS), "drps"),
    ],
)
def test_branch_register(insn, text) -> None:
    assert render(insn) == text


def test_branch_immediate() -> None:
    assert render(Instruction(Opcode.B, (Immediate(0x3FFFFFF, 26),))) == "b #-0x1"
    assert render(Instruction(Opcode.BL, (Immediate(0x100, 26),))) == "bl #0x100"


def test_compare_and_branch() -> None:
    w0 = Register(RegisterName.X0, 32)
    assert render(Instruction(Opcode.CBZ, (w0, Immediate(0x10, 19)))) == "cbz w0, #0x10"
    assert (
        render(Instruction(Opcode.CBNZ, (x(1), Immediate(0x7FFF0, 19))))
        == "cbnz x1, #-0x10"
    )


def test_test_and_branch() -> None:
    insn = Instruction(Opcode.TBZ, (x(0), Immediate(63, 6), Immediate(0x3FFF, 14)))
    assert render(insn) == "tbz x0, #63, #-0x1"
    insn = Instruction(
        Opcode.TBNZ, (Register(RegisterName.X5, 32), Immediate(3, 6), Immediate(0x40, 14))
    )
    assert render(insn) == "tbnz w5, #3, #0x40"


def test_branch_contract_violations() -> None:
    with pytest.raises(RenderContractError):
        render(Instruction(Opcode.B, (x(0),)))
    with pytest.raises(RenderContractError):
        render(Instruction(Opcode.RET, (LR, x(1))))
    with pytest.raises(RenderContractError):
        render(Instruction(Opcode.BRAA, (x(1),)))
    with pytest.raises(RenderContractError):
        render(Instruction(Opcode.SVC))
