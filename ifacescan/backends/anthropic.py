"""Report sink using the Anthropic Python SDK."""

from ifacescan.backends import REPORT_SYSTEM_PROMPT


class AnthropicBackend:
    """Sends the conformance report through the Anthropic messages API.

    The report goes in as the user turn; `system_prompt` frames how the
    model should read it.
    """

    def __init__(
        self,
        model: str = "claude-haiku-4-5-20251001",
        max_tokens: int = 1024,
        system_prompt: str = REPORT_SYSTEM_PROMPT,
    ):
        try:
            import anthropic
        except ImportError:
            raise ImportError(
                "The anthropic backend requires the anthropic package. "
                "Install it with: ifacescan install anthropic"
            )

        self._client = anthropic.Anthropic()  # Reads ANTHROPIC_API_KEY
        self._model = model
        self._max_tokens = max_tokens
        self._system_prompt = system_prompt

    def complete(self, prompt: str) -> str:
        response = self._client.messages.create(
            model=self._model,
            max_tokens=self._max_tokens,
            system=self._system_prompt,
            messages=[{"role": "user", "content": prompt}],
        )
        # Keep only text blocks; an empty reply counts as a failed send.
        return "".join(
            block.text for block in response.content
            if getattr(block, "type", "text") == "text"
        )
