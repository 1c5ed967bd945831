"""Tests for the command line entry point."""

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from ifacescan.cli import main


def _make_tree(tmp_path: Path, structure: dict):
    """Create a directory tree from a nested dict. Values are file contents."""
    for name, content in structure.items():
        path = tmp_path / name
        if isinstance(content, dict):
            path.mkdir(exist_ok=True)
            _make_tree(path, content)
        else:
            path.write_text(content)


API_GO = "package api\n\ntype Closer interface {\n\tClose() error\n}\n"
IMPL_GO = (
    "package impl\n\n"
    "type File struct{}\n\n"
    "func (f *File) Close() error { return nil }\n\n"
    "type Point struct{}\n"
)


@pytest.fixture
def project(tmp_path, monkeypatch):
    _make_tree(tmp_path, {
        "api.go": API_GO,
        "impl": {"impl.go": IMPL_GO},
    })
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("API_KEY", raising=False)
    return tmp_path


class TestMain:
    def test_text_report(self, project, capsys):
        main(["api.go", "impl"])
        out = capsys.readouterr().out
        assert "Interface: Closer" in out
        assert "Methods: [Close]" in out
        assert "Implementations: [File]" in out

    def test_json_report(self, project, capsys):
        main(["api.go", "impl", "--json"])
        data = json.loads(capsys.readouterr().out)
        assert data["results"][0]["implementations"] == ["File"]
        assert data["files_scanned"] == 1

    def test_no_implementations(self, project, capsys):
        (project / "empty").mkdir()
        main(["api.go", "empty"])
        assert "No implementations found." in capsys.readouterr().out

    def test_paths_from_config_file(self, project, capsys):
        (project / "config.yaml").write_text("go_file_path: api.go\ngo_directory: impl\n")
        main([])
        assert "Implementations: [File]" in capsys.readouterr().out

    def test_explicit_config_file(self, project, capsys):
        (project / "scan.yaml").write_text("go_file_path: api.go\ngo_directory: impl\n")
        main(["--config", "scan.yaml"])
        assert "Interface: Closer" in capsys.readouterr().out

    def test_missing_paths(self, project, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main([])
        assert excinfo.value.code == 1
        assert "Error:" in capsys.readouterr().err

    def test_bad_declaration_file(self, project, capsys):
        (project / "bad.go").write_text("package api\n\ntype X interface {\n")
        with pytest.raises(SystemExit) as excinfo:
            main(["bad.go", "impl"])
        assert excinfo.value.code == 1
        assert "bad.go" in capsys.readouterr().err

    def test_missing_root(self, project, capsys):
        with pytest.raises(SystemExit):
            main(["api.go", "nowhere"])
        assert "cannot traverse" in capsys.readouterr().err

    def test_broken_unit_is_warned_not_fatal(self, project, capsys):
        (project / "impl" / "zz_broken.go").write_text("package impl\n\nfunc (x *Y Z() {\n")
        main(["api.go", "impl"])
        captured = capsys.readouterr()
        assert "Implementations: [File]" in captured.out
        assert "unit_skipped" in captured.err
        lines = captured.err.splitlines()
        header = lines.index("Skipped 1 file(s):")
        assert lines[header + 1].startswith(str(Path("impl") / "zz_broken.go") + ":")

    def test_clean_run_prints_no_diagnostics(self, project, capsys):
        main(["api.go", "impl"])
        assert "Skipped" not in capsys.readouterr().err

    def test_verbose_summary(self, project, capsys):
        main(["api.go", "impl", "-v"])
        err = capsys.readouterr().err
        assert "candidate types in 1 files" in err
        assert "analysis_complete" in err

    def test_info_events_hidden_by_default(self, project, capsys):
        main(["api.go", "impl"])
        assert "analysis_complete" not in capsys.readouterr().err

    def test_http_backend_requires_api_key(self, project, capsys):
        with pytest.raises(SystemExit):
            main(["api.go", "impl", "--backend", "http"])
        assert "API_KEY" in capsys.readouterr().err

    @patch("ifacescan.backends.http.requests.post")
    def test_sends_report_to_http_backend(self, mock_post, project, capsys, monkeypatch):
        monkeypatch.setenv("API_KEY", "secret")
        mock_post.return_value = MagicMock(status_code=200)
        mock_post.return_value.json.return_value = {
            "choices": [{"message": {"content": "Looks consistent."}}]
        }
        main(["api.go", "impl", "--backend", "http", "--endpoint", "http://localhost/v1"])

        captured = capsys.readouterr()
        assert "Looks consistent." in captured.out
        assert "Report sent successfully!" in captured.err

        args, kwargs = mock_post.call_args
        assert args[0] == "http://localhost/v1"
        content = kwargs["json"]["messages"][0]["content"]
        assert content.startswith("Here are the interfaces and their implementations:")
        assert "Implementations: [File]" in content

    @patch("ifacescan.backends.http.requests.post")
    def test_failed_send_exits_nonzero(self, mock_post, project, capsys, monkeypatch):
        monkeypatch.setenv("API_KEY", "secret")
        mock_post.return_value = MagicMock(status_code=500)
        with pytest.raises(SystemExit) as excinfo:
            main(["api.go", "impl", "--backend", "http"])
        assert excinfo.value.code == 1
        assert "Failed to send report" in capsys.readouterr().err

    def test_install_usage(self, capsys):
        with pytest.raises(SystemExit):
            main(["install"])
        assert "anthropic" in capsys.readouterr().out

    def test_install_unknown_backend(self, capsys):
        with pytest.raises(SystemExit):
            main(["install", "nope"])
        assert "Unknown backend: nope" in capsys.readouterr().out
