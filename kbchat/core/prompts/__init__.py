"""Prompt templates."""

from kbchat.core.prompts.chat_prompt import (
    CHAT_PROMPT,
    NO_CONTEXT_MARKER,
    build_chat_messages,
    format_context,
)

__all__ = ["CHAT_PROMPT", "NO_CONTEXT_MARKER", "build_chat_messages", "format_context"]
