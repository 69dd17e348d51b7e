"""Chunked delivery of transformed code as server-sent events."""

import json
from typing import Any, Dict, Iterable, Iterator

from codeshift_mcp.constants import StreamDefaults

StreamEvent = Dict[str, Any]


def iter_code_chunks(code: str, chunk_size: int = StreamDefaults.CHUNK_SIZE) -> Iterator[StreamEvent]:
    """Yield delta events covering the code, then a done event.

    Args:
        code: Text to deliver
        chunk_size: Characters per delta

    Yields:
        ``{"type": "delta", "delta": ..., "full_text": ...}`` per chunk,
        where ``full_text`` is everything delivered so far, then
        ``{"type": "done"}``

    Raises:
        ValueError: If chunk_size is not positive
    """
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    for end in range(chunk_size, len(code) + chunk_size, chunk_size):
        yield {
            "type": "delta",
            "delta": code[end - chunk_size:end],
            "full_text": code[:end],
        }
    yield {"type": "done"}


def format_sse_events(events: Iterable[StreamEvent]) -> Iterator[str]:
    """Render events as ``data: <json>`` server-sent event frames."""
    for event in events:
        yield f"data: {json.dumps(event)}\n\n"


def reassemble(events: Iterable[StreamEvent]) -> str:
    """Concatenate the deltas of an event stream."""
    return "".join(event["delta"] for event in events if event.get("type") == "delta")
