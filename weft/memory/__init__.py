"""Conversation memory backends."""

from ..types import ConversationMemory
from .buffer import BufferMemory, DEFAULT_CONVERSATION
from .paired import PairedMemory, TurnPair, pair_turns

__all__ = [
    "ConversationMemory",
    "BufferMemory",
    "DEFAULT_CONVERSATION",
    "PairedMemory",
    "TurnPair",
    "pair_turns",
]
