"""
Conversation chain - prompt, model and memory wired together

Invocation contract: {"input": str} -> {"response": str}
"""

import logging
from typing import Any, Dict

from langchain_core.language_models import BaseChatModel
from langchain_core.output_parsers import StrOutputParser
from langchain_core.prompts import ChatPromptTemplate

from docgpt.services.memory import ChatMemory

logger = logging.getLogger(__name__)


class ConversationChain:
    """
    Runs a chat prompt with the chat's memory replayed as history

    The chain never writes to memory: the caller persists the answer and
    the next memory is rebuilt from the stored transcript.
    """

    input_key = "input"
    output_key = "response"

    def __init__(self, llm: BaseChatModel, prompt: ChatPromptTemplate, memory: ChatMemory):
        self.llm = llm
        self.prompt = prompt
        self.memory = memory
        self.runnable = prompt | llm | StrOutputParser()

    async def ainvoke(self, inputs: Dict[str, Any]) -> Dict[str, str]:
        if self.input_key not in inputs:
            raise ValueError(f"Missing chain input '{self.input_key}'")

        variables = {**self.memory.load_memory_variables(), self.input_key: inputs[self.input_key]}
        logger.debug(f"Invoking chain for chat {self.memory.chat_id} with {len(self.memory)} history messages")

        text = await self.runnable.ainvoke(variables)
        return {self.output_key: text}
