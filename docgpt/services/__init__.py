"""
Business Logic Services

Includes:
- ConversationService: chat queries and document summaries
- ChatMemory: memory of one chat rebuilt from its transcript
- ConversationChain: prompt, model and memory wired together
- create_chat_llm: LiteLLM client for a chat model
"""

# Lazy imports to avoid circular dependencies
# Import services directly from their modules instead

__all__ = [
    "ConversationService",
    "ChatMemory",
    "ConversationChain",
    "create_chat_llm",
]
