"""Candidate collector: concrete types and their receiver methods across a tree."""

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

import structlog

from ifacescan.errors import ParseError, SourceReadError, WalkError
from ifacescan.extractor import read_source
from ifacescan.languages import Language
from ifacescan.models import (
    CollectionResult,
    FileDiagnostic,
    TypeCandidate,
    UnitDeclarations,
)

logger = structlog.get_logger(__name__)


def iter_source_files(directory: Path, language: Language) -> Iterator[Path]:
    """Yield source files depth-first in lexical order.

    Files and subdirectories are interleaved by name. Hidden, ignored and
    symlinked directories are not entered.
    """
    try:
        entries = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        raise WalkError(str(directory), exc.strerror or str(exc)) from exc

    for entry in entries:
        if entry.is_dir():
            if (entry.is_symlink() or entry.name.startswith(".")
                    or entry.name in language.ignore_dirs):
                continue
            yield from iter_source_files(entry, language)
        elif entry.suffix in language.suffixes and entry.is_file():
            yield entry


def _parse_unit(path: Path, language: Language) -> UnitDeclarations | FileDiagnostic:
    try:
        return language.extract_declarations(read_source(path))
    except ParseError as exc:
        return FileDiagnostic(
            path=str(path), message=exc.message, line=exc.line, column=exc.column,
        )
    except SourceReadError as exc:
        return FileDiagnostic(path=str(path), message=exc.reason)


@dataclass
class _ScanState:
    """Running accumulator threaded through the fold over source units."""
    candidates: dict[str, TypeCandidate] = field(default_factory=dict)
    interface_names: set[str] = field(default_factory=set)
    diagnostics: list[FileDiagnostic] = field(default_factory=list)


def _fold_unit(
    state: _ScanState,
    path: Path,
    parsed: UnitDeclarations | FileDiagnostic,
) -> _ScanState:
    if isinstance(parsed, FileDiagnostic):
        logger.warning("unit_skipped", path=parsed.path, error=parsed.message,
                       line=parsed.line)
        state.diagnostics.append(parsed)
        return state

    state.interface_names.update(parsed.interfaces)

    # Declarations first so a type's own file fixes its discovery position.
    for decl in parsed.types:
        candidate = state.candidates.get(decl.name)
        if candidate is None:
            state.candidates[decl.name] = TypeCandidate(
                name=decl.name, kind=decl.kind, path=str(path), target=decl.target,
            )
        elif candidate.kind is None:
            candidate.kind = decl.kind
            candidate.target = decl.target

    for method in parsed.methods:
        candidate = state.candidates.get(method.owner)
        if candidate is None:
            candidate = TypeCandidate(name=method.owner, path=str(path))
            state.candidates[method.owner] = candidate
        candidate.add_method(method.signature)

    return state


def _resolve_kind(state: _ScanState, candidate: TypeCandidate) -> str | None:
    """Follow "named" declarations through the scan to a concrete kind.

    Returns "interface" when the chain ends at an interface, or at a type from
    a package outside the scan for a type with no methods of its own. Go does
    not allow methods on interface types, so any type with methods is concrete.
    """
    seen = {candidate.name}
    current = candidate
    while current.kind == "named":
        target = current.target
        if target in state.interface_names:
            return "interface"
        if "." in target:
            return "other" if candidate.methods else "interface"
        following = state.candidates.get(target)
        if following is None or target in seen:
            return "other"
        seen.add(target)
        current = following
    return current.kind


def collect_candidates(
    root: str | Path,
    language: Language | None = None,
    workers: int = 1,
) -> CollectionResult:
    """Collect every concrete type and its method set under a directory.

    Args:
        root: Directory tree to scan.
        language: Language plugin to parse with (default: Go).
        workers: Number of files parsed in parallel. Results are folded in
                 walk order, so the outcome does not depend on this value.

    Returns:
        CollectionResult with candidates in discovery order and one
        diagnostic per source unit that could not be read or parsed.

    Raises:
        WalkError: If the root or a directory below it cannot be traversed.
    """
    if language is None:
        from ifacescan.languages.go import GoLanguage
        language = GoLanguage()

    root = Path(root)
    if not root.exists():
        raise WalkError(str(root), "no such directory")
    if not root.is_dir():
        raise WalkError(str(root), "not a directory")

    files = list(iter_source_files(root, language))
    parsed: list[UnitDeclarations | FileDiagnostic] = [None] * len(files)  # type: ignore[list-item]

    if workers > 1 and len(files) > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = {
                pool.submit(_parse_unit, path, language): i
                for i, path in enumerate(files)
            }
            for future in as_completed(futures):
                parsed[futures[future]] = future.result()
    else:
        for i, path in enumerate(files):
            parsed[i] = _parse_unit(path, language)

    state = _ScanState()
    for path, unit in zip(files, parsed):
        state = _fold_unit(state, path, unit)

    candidates: dict[str, TypeCandidate] = {}
    for name, candidate in state.candidates.items():
        if name in state.interface_names:
            continue
        kind = _resolve_kind(state, candidate)
        if kind == "interface":
            logger.debug("interface_type_excluded", type=name, target=candidate.target)
            continue
        candidate.kind = kind
        candidates[name] = candidate

    logger.debug(
        "candidates_collected",
        root=str(root),
        files=len(files),
        candidates=len(candidates),
        skipped=len(state.diagnostics),
    )
    return CollectionResult(
        candidates=candidates,
        diagnostics=state.diagnostics,
        files_scanned=len(files),
    )
