"""Declaration extractor: interfaces declared in a single source unit."""

from pathlib import Path

import structlog

from ifacescan.errors import ParseError, SourceReadError
from ifacescan.languages import Language
from ifacescan.models import InterfaceSpec

logger = structlog.get_logger(__name__)


def read_source(path: Path) -> bytes:
    """Read a source unit, raising SourceReadError instead of OSError."""
    try:
        return path.read_bytes()
    except OSError as exc:
        raise SourceReadError(str(path), exc.strerror or str(exc)) from exc


def extract_interfaces(
    path: str | Path,
    language: Language | None = None,
) -> dict[str, InterfaceSpec]:
    """Extract every interface declared in one source file.

    Args:
        path: The source unit holding the interface declarations.
        language: Language plugin to parse with (default: Go).

    Returns:
        Interfaces keyed by name, in declaration order. A name declared twice
        keeps only its last declaration.

    Raises:
        SourceReadError: If the file cannot be read.
        ParseError: If the file is not syntactically valid.
    """
    if language is None:
        from ifacescan.languages.go import GoLanguage
        language = GoLanguage()

    path = Path(path)
    source = read_source(path)
    try:
        interfaces = language.extract_interfaces(source)
    except ParseError as exc:
        raise exc.with_path(str(path)) from None

    logger.debug("interfaces_extracted", path=str(path), count=len(interfaces))
    return interfaces
