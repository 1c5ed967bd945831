"""Backend that shells out to the `claude` CLI."""

import subprocess

import structlog

logger = structlog.get_logger(__name__)


class ClaudeCodeBackend:
    """Pipes the report to the `claude` CLI tool as a subprocess."""

    def __init__(self, model: str = "claude-haiku-4-5-20251001", timeout: int = 120):
        self._model = model
        self._timeout = timeout

    def complete(self, prompt: str) -> str:
        try:
            result = subprocess.run(
                ["claude", "-p", prompt, "--output-format", "json", "--model", self._model],
                capture_output=True,
                text=True,
                timeout=self._timeout,
            )
        except subprocess.TimeoutExpired:
            logger.warning("backend_timeout", backend="claude-code", timeout=self._timeout)
            return ""
        except FileNotFoundError:
            logger.warning("backend_unavailable", backend="claude-code")
            return ""

        if result.returncode != 0:
            logger.warning("backend_failed", backend="claude-code", code=result.returncode)
            return ""

        return result.stdout
