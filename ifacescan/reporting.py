"""Convenience formatters for conformance results.

Callers that need another layout can format the result objects themselves.
"""

import json
from dataclasses import asdict

from ifacescan.models import AnalysisResult, ConformanceResult, FileDiagnostic

MESSAGE_HEADER = "Here are the interfaces and their implementations:"


def _bracket(names: list[str]) -> str:
    return "[" + ", ".join(names) + "]"


def format_result(result: ConformanceResult) -> str:
    """Format one result as an Interface / Methods / Implementations block."""
    return (
        f"Interface: {result.interface_name}\n"
        f"Methods: {_bracket(result.methods)}\n"
        f"Implementations: {_bracket(result.implementations)}"
    )


def format_text_report(results: list[ConformanceResult]) -> str:
    """Format all results as blank-line separated blocks."""
    if not results:
        return "No implementations found."
    return "\n\n".join(format_result(r) for r in results)


def format_message(results: list[ConformanceResult]) -> str:
    """Format results as the chat message sent to a backend."""
    lines = [MESSAGE_HEADER]
    for r in results:
        lines.append(format_result(r))
        lines.append("")
    return "\n".join(lines)


def format_diagnostics(diagnostics: list[FileDiagnostic]) -> str:
    """Format skipped source units, one `path:line:col: message` per line."""
    return "\n".join(str(d) for d in diagnostics)


def format_summary(analysis: AnalysisResult) -> str:
    """One-line overview of an analysis run."""
    return (
        f"{len(analysis.interfaces)} interfaces, "
        f"{analysis.candidates_found} candidate types in "
        f"{analysis.files_scanned} files, "
        f"{len(analysis.results)} implemented, "
        f"{len(analysis.diagnostics)} files skipped"
    )


def format_json(analysis: AnalysisResult) -> str:
    """Format an AnalysisResult as JSON."""
    data = {
        "results": [asdict(r) for r in analysis.results],
        "diagnostics": [asdict(d) for d in analysis.diagnostics],
        "files_scanned": analysis.files_scanned,
        "candidates_found": analysis.candidates_found,
    }
    return json.dumps(data, indent=2)
