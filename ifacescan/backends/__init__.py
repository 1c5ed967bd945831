"""Backend protocol and shared utilities for report sinks."""

import json
import re
from typing import Protocol


# System prompt for chat backends that accept one. The report lists each Go
# interface with the concrete types whose method sets cover it.
REPORT_SYSTEM_PROMPT = (
    "You review Go interface conformance reports. Each block names an "
    "interface, its required methods and the concrete types whose receiver "
    "methods cover them. Point out interfaces with a single implementation "
    "and implementations that look accidental, in a few short sentences."
)


class Backend(Protocol):
    """Where a formatted report is sent. All backends implement this."""

    def complete(self, prompt: str) -> str:
        """Send a prompt to the endpoint, return its raw text response.

        Returns an empty string when the request fails.
        """
        ...


def _strip_thinking(text: str) -> str:
    """Remove <think>...</think> blocks (e.g., from Qwen3 reasoning models)."""
    return re.sub(r"<think>.*?</think>", "", text, flags=re.DOTALL).strip()


def extract_reply(text: str) -> str:
    """Pull the reply text out of a raw backend response.

    Handles:
    - Plain text replies
    - Claude Code wrapped JSON: {"result": "..."}
    - Thinking-wrapped responses (e.g., <think>...</think> from Qwen3)
    """
    try:
        outer = json.loads(text)
    except (json.JSONDecodeError, TypeError):
        outer = None

    if isinstance(outer, dict) and isinstance(outer.get("result"), str):
        text = outer["result"]

    return _strip_thinking(text or "")
