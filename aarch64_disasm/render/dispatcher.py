from __future__ import annotations

import logging
from functools import lru_cache
from typing import Callable, Dict, List, Optional

from ..config import RenderConfig, default_render_config
from ..constants import UNSUPPORTED_INSTRUCTION
from ..instr.instruction import Instruction
from ..instr.opcodes import Family, family_of
from ..tokens import TText, Token, asm_str
from . import branches, data_processing, loadstore

logger = logging.getLogger(__name__)

FamilyRenderer = Callable[[Instruction], List[Token]]

RENDERERS: Dict[Family, FamilyRenderer] = {
    Family.PC_RELATIVE_ADDRESSING: data_processing.render_pc_relative_addressing,
    Family.ADD_SUBTRACT_IMMEDIATE: data_processing.render_add_subtract_immediate,
    Family.LOGICAL_IMMEDIATE: data_processing.render_logical_immediate,
    Family.MOVE_WIDE_IMMEDIATE: data_processing.render_move_wide_immediate,
    Family.BITFIELD: data_processing.render_bitfield,
    Family.EXTRACT: data_processing.render_extract,
    Family.CONDITIONAL_BRANCH: branches.render_conditional_branch,
    Family.EXCEPTION_GENERATION: branches.render_exception_generation,
    Family.SYSTEM: branches.render_system,
    Family.BRANCH_REGISTER: branches.render_branch_register,
    Family.BRANCH_IMMEDIATE: branches.render_branch_immediate,
    Family.COMPARE_AND_BRANCH: branches.render_compare_and_branch,
    Family.TEST_AND_BRANCH: branches.render_test_and_branch,
    Family.LOAD_STORE_EXCLUSIVE: loadstore.render_load_store_exclusive,
    Family.LOAD_LITERAL: loadstore.render_load_literal,
    Family.LOAD_STORE_PAIR: loadstore.render_load_store_pair,
    Family.LOAD_STORE: loadstore.render_load_store,
    Family.DATA_PROCESSING_TWO_SOURCE: data_processing.render_data_processing_two_source,
    Family.DATA_PROCESSING_ONE_SOURCE: data_processing.render_data_processing_one_source,
    Family.LOGICAL_SHIFTED_REGISTER: data_processing.render_logical_shifted_register,
    Family.ADD_SUBTRACT_SHIFTED_REGISTER: data_processing.render_add_subtract_shifted_register,
    Family.ADD_SUBTRACT_EXTENDED_REGISTER: data_processing.render_add_subtract_extended_register,
    Family.ADD_SUBTRACT_WITH_CARRY: data_processing.render_add_subtract_with_carry,
    Family.CONDITIONAL_COMPARE: data_processing.render_conditional_compare,
    Family.CONDITIONAL_SELECT: data_processing.render_conditional_select,
    Family.DATA_PROCESSING_THREE_SOURCE: data_processing.render_data_processing_three_source,
}


class FamilyDispatcher:
    """Routes an instruction to the renderer of its encoding family."""

    def __init__(self, config: Optional[RenderConfig] = None) -> None:
        self.config = config if config is not None else default_render_config()
        self.renderers: Dict[Family, FamilyRenderer] = dict(RENDERERS)

    def renderer_for(self, opcode: int) -> Optional[FamilyRenderer]:
        family = family_of(opcode)
        if family is None:
            return None
        if self.config.traces(family.value):
            logger.debug("opcode %s -> %s", opcode, family.value)
        return self.renderers[family]

    def render_tokens(self, insn: Instruction) -> List[Token]:
        renderer = self.renderer_for(insn.opcode)
        if renderer is None:
            logger.warning("No renderer for %s", insn.name())
            return [TText(UNSUPPORTED_INSTRUCTION)]
        return renderer(insn)

    def render(self, insn: Instruction) -> str:
        return asm_str(self.render_tokens(insn))


@lru_cache(maxsize=8)
def dispatcher_for(config: RenderConfig) -> FamilyDispatcher:
    return FamilyDispatcher(config)


def render_tokens(insn: Instruction, config: Optional[RenderConfig] = None) -> List[Token]:
    if config is None:
        config = default_render_config()
    return dispatcher_for(config).render_tokens(insn)


def render(insn: Instruction, config: Optional[RenderConfig] = None) -> str:
    """Render one decoded instruction as a line of UAL text."""
    return asm_str(render_tokens(insn, config))


__all__ = ["FamilyDispatcher", "RENDERERS", "dispatcher_for", "render", "render_tokens"]
