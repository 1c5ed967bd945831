import json

from ifacescan.models import AnalysisResult, ConformanceResult, FileDiagnostic
from ifacescan.reporting import (
    format_diagnostics,
    format_json,
    format_message,
    format_result,
    format_summary,
    format_text_report,
)


def _make_results() -> list[ConformanceResult]:
    return [
        ConformanceResult(
            interface_name="Service",
            methods=["Actions", "ActionByID"],
            implementations=["UserService", "OrderService"],
        ),
        ConformanceResult(
            interface_name="Writer",
            methods=["Write"],
            implementations=["Logger"],
        ),
    ]


def _make_analysis() -> AnalysisResult:
    return AnalysisResult(
        results=_make_results(),
        diagnostics=[FileDiagnostic(path="svc/broken.go", message="missing }", line=3, column=1)],
        files_scanned=4,
        candidates_found=3,
    )


class TestTextReport:
    def test_block_format(self):
        block = format_result(_make_results()[0])
        assert block == (
            "Interface: Service\n"
            "Methods: [Actions, ActionByID]\n"
            "Implementations: [UserService, OrderService]"
        )

    def test_blocks_separated_by_blank_line(self):
        report = format_text_report(_make_results())
        assert "\n\nInterface: Writer" in report

    def test_empty_results(self):
        assert format_text_report([]) == "No implementations found."


class TestMessage:
    def test_header_then_blocks(self):
        message = format_message(_make_results())
        lines = message.splitlines()
        assert lines[0] == "Here are the interfaces and their implementations:"
        assert lines[1] == "Interface: Service"
        assert "Implementations: [Logger]" in message

    def test_empty_results_still_has_header(self):
        assert format_message([]) == "Here are the interfaces and their implementations:"


class TestSummary:
    def test_counts(self):
        summary = format_summary(_make_analysis())
        assert "3 candidate types in 4 files" in summary
        assert "2 implemented" in summary
        assert "1 files skipped" in summary


class TestJsonReport:
    def test_valid_json(self):
        data = json.loads(format_json(_make_analysis()))
        assert data["results"][0] == {
            "interface_name": "Service",
            "methods": ["Actions", "ActionByID"],
            "implementations": ["UserService", "OrderService"],
        }
        assert data["diagnostics"][0]["path"] == "svc/broken.go"
        assert data["diagnostics"][0]["line"] == 3
        assert data["files_scanned"] == 4

    def test_diagnostics_one_per_line(self):
        diagnostics = [
            FileDiagnostic(path="svc/broken.go", message="missing }", line=3, column=1),
            FileDiagnostic(path="svc/locked.go", message="permission denied"),
        ]
        assert format_diagnostics(diagnostics) == (
            "svc/broken.go:3:1: missing }\n"
            "svc/locked.go: permission denied"
        )
        assert format_diagnostics([]) == ""

    def test_diagnostic_str(self):
        diag = _make_analysis().diagnostics[0]
        assert str(diag) == "svc/broken.go:3:1: missing }"
        assert str(FileDiagnostic(path="a.go", message="permission denied")) == (
            "a.go: permission denied"
        )
