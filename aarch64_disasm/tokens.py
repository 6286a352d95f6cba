# based on https://github.com/whitequark/binja-avnera/blob/main/mc/tokens.py
import enum
from typing import List


class TokenKind(enum.Enum):
    INSTRUCTION = "instruction"
    SEPARATOR = "separator"
    TEXT = "text"
    INTEGER = "integer"
    REGISTER = "register"
    BEGIN_MEMORY = "begin_memory"
    END_MEMORY = "end_memory"


class Token:
    kind: TokenKind

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return False
        return self.__dict__ == getattr(other, "__dict__", {})

    def __hash__(self) -> int:
        return hash((type(self).__name__, str(self)))


def asm_str(parts: List[Token]) -> str:
    return "".join(str(part) for part in parts)


class TInstr(Token):
    kind = TokenKind.INSTRUCTION

    def __init__(self, instr: str) -> None:
        self.instr = instr

    def __repr__(self) -> str:
        return f"TInstr({self.instr})"

    def __str__(self) -> str:
        return self.instr


class TSep(Token):
    kind = TokenKind.SEPARATOR

    def __init__(self, sep: str) -> None:
        self.sep = sep

    def __repr__(self) -> str:
        return f"TSep({self.sep})"

    def __str__(self) -> str:
        return self.sep


class TText(Token):
    kind = TokenKind.TEXT

    def __init__(self, text: str) -> None:
        self.text = text

    def __repr__(self) -> str:
        return f"TText({self.text})"

    def __str__(self) -> str:
        return self.text


class TInt(Token):
    kind = TokenKind.INTEGER

    def __init__(self, value: str) -> None:
        self.value = value

    def __repr__(self) -> str:
        return f"TInt({self.value})"

    def __str__(self) -> str:
        return str(self.value)


class TBegMem(Token):
    kind = TokenKind.BEGIN_MEMORY

    def __repr__(self) -> str:
        return "TBegMem()"

    def __str__(self) -> str:
        return "["


class TEndMem(Token):
    kind = TokenKind.END_MEMORY

    def __init__(self, writeback: bool = False) -> None:
        self.writeback = writeback

    def __repr__(self) -> str:
        return f"TEndMem({self.writeback})"

    def __str__(self) -> str:
        return "]!" if self.writeback else "]"


class TReg(Token):
    kind = TokenKind.REGISTER

    def __init__(self, reg: str) -> None:
        self.reg = reg

    def __repr__(self) -> str:
        return f"TReg({self.reg})"

    def __str__(self) -> str:
        return self.reg
