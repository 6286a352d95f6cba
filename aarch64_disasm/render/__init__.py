"""
Per-family UAL renderers and the dispatcher that selects between them.
"""

from .dispatcher import RENDERERS, FamilyDispatcher, dispatcher_for, render, render_tokens  # noqa: F401
from .helpers import barrier_tokens, cond_tokens, join_operands, prefetch_tokens  # noqa: F401

__all__ = [
    "RENDERERS",
    "FamilyDispatcher",
    "dispatcher_for",
    "render",
    "render_tokens",
    "barrier_tokens",
    "cond_tokens",
    "join_operands",
    "prefetch_tokens",
]
