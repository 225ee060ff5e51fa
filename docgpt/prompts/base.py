"""
Prompt Builder - Language and model specific prompts for chats
"""

from datetime import datetime
from typing import List, Dict, Any
from pathlib import Path
from jinja2 import Environment, FileSystemLoader, select_autoescape
from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage
from langchain_core.prompts import ChatPromptTemplate, MessagesPlaceholder

from docgpt.schemas.chat import Language, LlmModel


class PromptBuilder:
    """
    Builds prompts from Jinja2 templates.

    One template per chat type and language:
    - conversation_<lang>: plain conversation with memory
    - qa_<lang>: answers grounded in retrieved excerpts
    - summary_<lang>: document condensation

    The rendered system text is passed to LangChain as a message object,
    never as a template, so braces in documents are left alone.
    """

    def __init__(self):
        templates_dir = Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(templates_dir),
            autoescape=select_autoescape(['html', 'xml']),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def _render(self, kind: str, language: Language, **context) -> str:
        template = self.env.get_template(f"{kind}_{Language(language).value}.jinja2")
        return template.render(**context).strip()

    def build_conversation_prompt(
        self,
        language: Language,
        model: LlmModel,
        summaries: List[Dict[str, Any]],
    ) -> ChatPromptTemplate:
        """
        Prompt for a conversation chat

        Args:
            language: Answer language
            model: Model the prompt is tuned for
            summaries: Chat summaries as {"path", "content"} dicts

        Returns:
            ChatPromptTemplate expecting 'history' and 'input'
        """
        system = self._render(
            "conversation",
            language,
            model=LlmModel(model).value,
            summaries=summaries,
            current_date=datetime.now().strftime("%Y-%m-%d"),
        )
        return self._with_history(system)

    def build_qa_prompt(
        self,
        language: Language,
        model: LlmModel,
        summaries: List[Dict[str, Any]],
        excerpts: List[Dict[str, Any]],
    ) -> ChatPromptTemplate:
        """
        Prompt for a retrieval-augmented chat

        Args:
            excerpts: Retrieved excerpts as {"source", "line_from", "line_to", "content"} dicts
        """
        system = self._render(
            "qa",
            language,
            model=LlmModel(model).value,
            summaries=summaries,
            excerpts=excerpts,
        )
        return self._with_history(system)

    def build_summary_messages(self, language: Language, path: str, content: str) -> List[BaseMessage]:
        """Messages asking the model to condense one document"""
        instructions = self._render("summary", language, path=path)
        return [SystemMessage(content=instructions), HumanMessage(content=content)]

    @staticmethod
    def _with_history(system: str) -> ChatPromptTemplate:
        return ChatPromptTemplate.from_messages([
            SystemMessage(content=system),
            MessagesPlaceholder(variable_name="history"),
            ("human", "{input}"),
        ])
