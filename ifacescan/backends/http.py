"""Backend that POSTs to an OpenAI-compatible chat completions endpoint."""

import requests
import structlog

logger = structlog.get_logger(__name__)

DEFAULT_ENDPOINT = "https://api.openai.com/v1/chat/completions"
DEFAULT_MODEL = "gpt-4"


class HttpBackend:
    """Sends the report as a chat message with bearer-token authentication."""

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        endpoint: str = DEFAULT_ENDPOINT,
        timeout: float = 60.0,
    ):
        if not api_key:
            raise ValueError("The http backend requires an API key.")
        self._api_key = api_key
        self._model = model
        self._endpoint = endpoint
        self._timeout = timeout

    def complete(self, prompt: str) -> str:
        payload = {
            "model": self._model,
            "messages": [{"role": "user", "content": prompt}],
        }
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        try:
            response = requests.post(
                self._endpoint,
                json=payload,
                headers=headers,
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            logger.warning("backend_request_failed", endpoint=self._endpoint, error=str(exc))
            return ""

        if response.status_code != 200:
            logger.warning(
                "backend_rejected",
                endpoint=self._endpoint,
                status=response.status_code,
            )
            return ""

        try:
            return response.json()["choices"][0]["message"]["content"] or ""
        except (ValueError, KeyError, IndexError, TypeError):
            # Not a chat completion body; hand back whatever the endpoint said.
            return response.text
