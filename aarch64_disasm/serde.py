from __future__ import annotations

import json
from enum import Enum
from typing import Any, Dict, List, Type, TypeVar, Union

from .instr.instruction import ConditionCode, Instruction
from .instr.opcodes import Opcode
from .instr.operands import (
    Extend,
    ExtendType,
    Immediate,
    ImmediateOffset,
    Operand,
    Register,
    RegisterName,
    RegisterOffset,
    Shift,
    ShiftType,
    SystemRegister,
    SystemRegisterName,
)

_KIND = "type"

E = TypeVar("E", bound=Enum)


def _enum_name(value: Enum) -> str:
    return value.name.lower()


def _enum_from_name(cls: Type[E], name: str) -> E:
    try:
        return cls[name.upper()]
    except KeyError:
        raise ValueError(f"Unknown {cls.__name__} {name!r}") from None


def _int_enum_to_json(cls: Type[E], value: int) -> Union[str, int]:
    try:
        return _enum_name(cls(value))
    except ValueError:
        # raw integers from a newer decoder are kept as numbers
        return int(value)


def _register_to_dict(reg: Register) -> Dict[str, Any]:
    return {
        _KIND: "reg",
        "name": _int_enum_to_json(RegisterName, reg.name),
        "size": reg.size,
    }


def _immediate_to_dict(imm: Immediate) -> Dict[str, Any]:
    return {_KIND: "imm", "value": imm.value, "size": imm.size}


def _shift_to_dict(shift: Shift) -> Dict[str, Any]:
    return {_KIND: "shift", "shift": _enum_name(shift.type), "count": shift.count}


def _extend_to_dict(extend: Extend) -> Dict[str, Any]:
    return {_KIND: "extend", "extend": _enum_name(extend.type), "count": extend.count}


def operand_to_dict(operand: Operand) -> Dict[str, Any]:
    if isinstance(operand, Register):
        return _register_to_dict(operand)
    if isinstance(operand, Immediate):
        return _immediate_to_dict(operand)
    if isinstance(operand, SystemRegister):
        return {
            _KIND: "sysreg",
            "name": _enum_name(operand.name),
            "op0": operand.op0,
            "op1": operand.op1,
            "crn": operand.crn,
            "crm": operand.crm,
            "op2": operand.op2,
        }
    if isinstance(operand, Shift):
        return _shift_to_dict(operand)
    if isinstance(operand, Extend):
        return _extend_to_dict(operand)
    if isinstance(operand, ImmediateOffset):
        return {
            _KIND: "imm_offset",
            "base": _register_to_dict(operand.base),
            "offset": _immediate_to_dict(operand.offset),
            "shift": _shift_to_dict(operand.shift),
            "writeback": operand.writeback,
            "post_index": operand.post_index,
            "size": operand.size,
        }
    if isinstance(operand, RegisterOffset):
        return {
            _KIND: "reg_offset",
            "base": _register_to_dict(operand.base),
            "offset": _register_to_dict(operand.offset),
            "extend": _extend_to_dict(operand.extend),
            "writeback": operand.writeback,
            "post_index": operand.post_index,
            "size": operand.size,
        }
    raise TypeError(f"Unsupported operand {operand!r}")


def instruction_to_dict(insn: Instruction) -> Dict[str, Any]:
    return {
        "opcode": _int_enum_to_json(Opcode, insn.opcode),
        "operands": [operand_to_dict(op) for op in insn.operands],
        "set_flags": insn.set_flags,
        "cc": _enum_name(ConditionCode(insn.cc)),
    }


def dumps(insns: Union[Instruction, List[Instruction]], *, indent: int = 2) -> str:
    if isinstance(insns, Instruction):
        return json.dumps(instruction_to_dict(insns), indent=indent, sort_keys=True)
    return json.dumps(
        [instruction_to_dict(insn) for insn in insns], indent=indent, sort_keys=True
    )


def _dict_to_register(data: Dict[str, Any]) -> Register:
    name = data["name"]
    if isinstance(name, str):
        return Register(_enum_from_name(RegisterName, name), data.get("size", 64))
    return Register(int(name), data.get("size", 64))


def _dict_to_immediate(data: Dict[str, Any]) -> Immediate:
    return Immediate(data["value"], data.get("size", 64))


def _dict_to_shift(data: Dict[str, Any]) -> Shift:
    return Shift(_enum_from_name(ShiftType, data["shift"]), data.get("count", 0))


def _dict_to_extend(data: Dict[str, Any]) -> Extend:
    return Extend(_enum_from_name(ExtendType, data["extend"]), data.get("count", 0))


def dict_to_operand(data: Dict[str, Any]) -> Operand:
    kind = data[_KIND]
    if kind == "reg":
        return _dict_to_register(data)
    if kind == "imm":
        return _dict_to_immediate(data)
    if kind == "sysreg":
        return SystemRegister(
            _enum_from_name(SystemRegisterName, data["name"]),
            op0=data.get("op0", 0),
            op1=data.get("op1", 0),
            crn=data.get("crn", 0),
            crm=data.get("crm", 0),
            op2=data.get("op2", 0),
        )
    if kind == "shift":
        return _dict_to_shift(data)
    if kind == "extend":
        return _dict_to_extend(data)
    if kind == "imm_offset":
        return ImmediateOffset(
            base=_dict_to_register(data["base"]),
            offset=_dict_to_immediate(data["offset"]),
            shift=_dict_to_shift(data["shift"]) if "shift" in data else Shift(),
            writeback=data.get("writeback", False),
            post_index=data.get("post_index", False),
            size=data.get("size", 64),
        )
    if kind == "reg_offset":
        return RegisterOffset(
            base=_dict_to_register(data["base"]),
            offset=_dict_to_register(data["offset"]),
            extend=_dict_to_extend(data["extend"]) if "extend" in data else Extend(),
            writeback=data.get("writeback", False),
            post_index=data.get("post_index", False),
            size=data.get("size", 64),
        )
    raise ValueError(f"Unknown operand kind {kind}")


def instruction_from_dict(data: Dict[str, Any]) -> Instruction:
    opcode = data["opcode"]
    return Instruction(
        opcode=_enum_from_name(Opcode, opcode) if isinstance(opcode, str) else opcode,
        operands=tuple(dict_to_operand(op) for op in data.get("operands", ())),
        set_flags=data.get("set_flags", False),
        cc=_enum_from_name(ConditionCode, data.get("cc", "al")),
    )


def loads(text: str) -> Union[Instruction, List[Instruction]]:
    data = json.loads(text)
    if isinstance(data, list):
        return [instruction_from_dict(item) for item in data]
    return instruction_from_dict(data)


__all__ = [
    "dict_to_operand",
    "dumps",
    "instruction_from_dict",
    "instruction_to_dict",
    "loads",
    "operand_to_dict",
]
