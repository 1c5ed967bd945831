"""Report sink using the Groq Python SDK."""

from ifacescan.backends import REPORT_SYSTEM_PROMPT


class GroqBackend:
    """Sends the conformance report through Groq chat completions."""

    def __init__(
        self,
        model: str = "qwen/qwen3-32b",
        max_tokens: int = 1024,
        system_prompt: str = REPORT_SYSTEM_PROMPT,
    ):
        try:
            import groq
        except ImportError:
            raise ImportError(
                "The groq backend requires the groq package. "
                "Install it with: ifacescan install groq"
            )

        self._client = groq.Groq()  # Reads GROQ_API_KEY
        self._model = model
        self._max_tokens = max_tokens
        self._system_prompt = system_prompt

    def _messages(self, prompt: str) -> list[dict[str, str]]:
        messages = [{"role": "user", "content": prompt}]
        if self._system_prompt:
            messages.insert(0, {"role": "system", "content": self._system_prompt})
        return messages

    def complete(self, prompt: str) -> str:
        response = self._client.chat.completions.create(
            model=self._model,
            max_tokens=self._max_tokens,
            messages=self._messages(prompt),  # type: ignore[arg-type]
        )
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""
