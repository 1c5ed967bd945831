from pathlib import Path

import structlog

from ifacescan.collector import collect_candidates
from ifacescan.extractor import extract_interfaces
from ifacescan.languages import Language
from ifacescan.matcher import match
from ifacescan.models import AnalysisResult

logger = structlog.get_logger(__name__)


def analyze(
    declaration_path: str | Path,
    root: str | Path,
    language: Language | None = None,
    strict: bool = False,
    structs_only: bool = False,
    workers: int = 1,
) -> AnalysisResult:
    """Find the types under `root` that implement the interfaces declared in
    `declaration_path`.

    Args:
        declaration_path: Source file holding the interface declarations.
        root: Directory tree to scan for implementations.
        language: Language plugin (default: Go).
        strict: Compare full method signatures instead of names.
        structs_only: Only report types declared as structs.
        workers: Number of files parsed in parallel during the scan.

    Returns:
        AnalysisResult with conformance results and per-file diagnostics.

    Raises:
        SourceReadError, ParseError: If the declaration file is unusable.
        WalkError: If the scan root cannot be traversed.
    """
    if language is None:
        from ifacescan.languages.go import GoLanguage
        language = GoLanguage()

    interfaces = extract_interfaces(declaration_path, language)
    if not interfaces:
        logger.info("no_interfaces", path=str(declaration_path))

    collection = collect_candidates(root, language, workers=workers)
    results = match(
        interfaces,
        collection.candidates,
        strict=strict,
        structs_only=structs_only,
    )

    logger.info(
        "analysis_complete",
        interfaces=len(interfaces),
        candidates=len(collection.candidates),
        implemented=len(results),
        skipped=len(collection.diagnostics),
    )
    return AnalysisResult(
        interfaces=interfaces,
        results=results,
        diagnostics=collection.diagnostics,
        files_scanned=collection.files_scanned,
        candidates_found=len(collection.candidates),
    )
