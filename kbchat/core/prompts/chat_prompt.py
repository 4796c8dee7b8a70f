"""
Chat answer prompt.

Defines the prompt template for knowledge-base answers. Message order:
instructions plus retrieved passages, prior conversation turns, the new
user message.

Dependencies: langchain_core.prompts
System role: Prompt template for the chat orchestrator
"""

from typing import Sequence

from langchain_core.messages import BaseMessage
from langchain_core.prompts import ChatPromptTemplate, MessagesPlaceholder

NO_CONTEXT_MARKER = "No relevant context was found in the knowledge base."

SYSTEM_PROMPT = """You are a customer support assistant answering on behalf of a business.

## Instructions
1. Answer using the knowledge base context below
2. If the context does not contain the answer, say that you do not have that information
3. Be helpful and accurate, never invent facts
4. Keep a polite, professional tone
5. When you use a passage, mention the source document by name

{widget_instructions}
## Knowledge Base Context
{context}"""

CHAT_PROMPT = ChatPromptTemplate.from_messages([
    ("system", SYSTEM_PROMPT),
    MessagesPlaceholder("history"),
    ("human", "{question}"),
])


def format_context(passages: Sequence[tuple[str, str]]) -> str:
    """
    Render passages for the prompt.

    Args:
        passages: (filename, content) pairs, best match first

    Returns:
        str: Passages separated by blank lines, or the no-context marker
    """
    if not passages:
        return NO_CONTEXT_MARKER
    return "\n\n".join(f"From {filename}:\n{content}" for filename, content in passages)


def build_chat_messages(
    question: str,
    passages: Sequence[tuple[str, str]],
    history: Sequence[BaseMessage],
    widget_system_prompt: str | None = None,
) -> list[BaseMessage]:
    """
    Assemble the full message list for one answer.

    Args:
        question: New user message
        passages: (filename, content) pairs from retrieval
        history: Prior turns as HumanMessage/AIMessage, oldest first
        widget_system_prompt: Operator instructions configured on the widget

    Returns:
        list[BaseMessage]: System message, history, user message
    """
    widget_instructions = (
        f"## Business Instructions\n{widget_system_prompt.strip()}\n"
        if widget_system_prompt and widget_system_prompt.strip()
        else ""
    )
    return CHAT_PROMPT.format_messages(
        widget_instructions=widget_instructions,
        context=format_context(passages),
        history=list(history),
        question=question,
    )
