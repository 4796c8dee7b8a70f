"""
Streaming response helpers for the chat endpoint.

Dependencies: kbchat.core.exceptions
System role: Token stream framing
"""

import logging
from collections.abc import AsyncGenerator

from kbchat.core.exceptions import CompletionFailed

logger = logging.getLogger(__name__)

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


async def stream_with_sentinel(
    tokens: AsyncGenerator[str, None],
    first_token: str,
    session_id: str,
    is_new_session: bool,
    sentinel_prefix: str = "SESSION_ID:",
) -> AsyncGenerator[str, None]:
    """
    Frame an already-started token stream for the HTTP body.

    For a new session the first chunk is exactly ``<prefix><id>\\n`` and is
    sent on its own; it is never repeated. The upstream generator is closed
    on every exit path, including a client disconnect.

    Args:
        tokens: Remaining answer tokens
        first_token: Token already pulled from ``tokens``
        session_id: Session the answer belongs to
        is_new_session: Whether the session was created by this request
        sentinel_prefix: Prefix of the session announcement line

    Yields:
        str: Body chunks
    """
    try:
        if is_new_session:
            yield f"{sentinel_prefix}{session_id}\n"
        yield first_token
        async for token in tokens:
            yield token
    except CompletionFailed:
        # Headers are already sent, the client sees a truncated body
        logger.error(
            f"{__name__}:stream_with_sentinel - Stream broken mid-answer",
            extra={"session_id": session_id},
        )
        raise
    finally:
        await tokens.aclose()
