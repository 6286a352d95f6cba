"""AArch64 instruction renderer: decoded instructions to canonical UAL text."""

from .config import RenderConfig, default_render_config, load_render_config
from .instr import (
    ConditionCode,
    Extend,
    ExtendType,
    Family,
    Immediate,
    ImmediateOffset,
    Instruction,
    Opcode,
    Register,
    RegisterName,
    RegisterOffset,
    RenderContractError,
    Shift,
    ShiftType,
    SystemRegister,
    SystemRegisterName,
    family_of,
)
from .render import FamilyDispatcher, render, render_tokens
from .tokens import Token, asm_str

__all__ = [
    "ConditionCode",
    "Extend",
    "ExtendType",
    "Family",
    "FamilyDispatcher",
    "Immediate",
    "ImmediateOffset",
    "Instruction",
    "Opcode",
    "Register",
    "RegisterName",
    "RegisterOffset",
    "RenderConfig",
    "RenderContractError",
    "Shift",
    "ShiftType",
    "SystemRegister",
    "SystemRegisterName",
    "Token",
    "asm_str",
    "default_render_config",
    "family_of",
    "load_render_config",
    "render",
    "render_tokens",
]
