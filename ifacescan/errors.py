"""Exceptions raised by the analysis pipeline."""


class AnalysisError(Exception):
    """Base class for failures that stop an analysis."""


class SourceReadError(AnalysisError):
    """A source unit could not be read from disk."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"cannot read {path}: {reason}")


class ParseError(AnalysisError):
    """A source unit is not syntactically valid."""

    def __init__(
        self,
        message: str,
        path: str = "",
        line: int | None = None,
        column: int | None = None,
    ):
        self.message = message
        self.path = path
        self.line = line
        self.column = column
        super().__init__(self._format())

    def _format(self) -> str:
        where = self.path or "<source>"
        if self.line is not None:
            where = f"{where}:{self.line}:{self.column}"
        return f"{where}: {self.message}"

    def with_path(self, path: str) -> "ParseError":
        return ParseError(self.message, path=path, line=self.line, column=self.column)


class WalkError(AnalysisError):
    """The scan root, or a directory below it, cannot be traversed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"cannot traverse {path}: {reason}")


class ConfigError(Exception):
    """The configuration file or environment is unusable."""
