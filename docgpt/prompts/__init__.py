"""
Prompt System for DocGPT Chats

Provides language specific prompt templates for conversation, qa and summaries.
"""

from docgpt.prompts.base import PromptBuilder

__all__ = ["PromptBuilder"]
