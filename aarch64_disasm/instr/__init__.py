from .instruction import (  # noqa: F401
    ConditionCode,
    Instruction,
    RenderContractError,
    operand_at,
    require_arity,
    unhandled,
    unpack,
)
from .opcodes import (  # noqa: F401
    FAMILY_RANGES,
    FAMILY_UPPER_BOUNDS,
    Family,
    Opcode,
    family_of,
    opcodes_in,
)
from .operands import (  # noqa: F401
    AnyOperand,
    Extend,
    ExtendType,
    HasWidth,
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
    render_operand,
)
