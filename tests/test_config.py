import pytest

from ifacescan.config import Config, load_config
from ifacescan.errors import ConfigError


class TestConfigFromFile:
    def test_reads_original_keys(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("go_file_path: api/service.go\ngo_directory: services\n")
        config = Config.from_file(path)
        assert config.go_file_path == "api/service.go"
        assert config.go_directory == "services"
        assert config.backend is None
        assert config.workers == 1

    def test_reads_optional_keys(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "backend: http\n"
            "model: gpt-4o\n"
            "endpoint: http://localhost:9000/v1/chat/completions\n"
            "strict_signatures: true\n"
            "structs_only: true\n"
            "workers: 4\n"
        )
        config = Config.from_file(path)
        assert config.backend == "http"
        assert config.model == "gpt-4o"
        assert config.strict_signatures is True
        assert config.structs_only is True
        assert config.workers == 4

    def test_empty_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert Config.from_file(path) == Config()

    def test_unknown_key(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("go_dir: services\n")
        with pytest.raises(ConfigError, match="go_dir"):
            Config.from_file(path)

    def test_api_key_not_accepted_from_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("api_key: oops\n")
        with pytest.raises(ConfigError, match="api_key"):
            Config.from_file(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("go_file_path: [unclosed\n")
        with pytest.raises(ConfigError, match="invalid YAML"):
            Config.from_file(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            Config.from_file(path)

    def test_bad_workers(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("workers: 0\n")
        with pytest.raises(ConfigError, match="workers"):
            Config.from_file(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="cannot read"):
            Config.from_file(tmp_path / "nope.yaml")


class TestLoadConfig:
    def test_api_key_from_environment(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("API_KEY", "secret")
        assert load_config().api_key == "secret"

    def test_api_key_absent(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("API_KEY", raising=False)
        assert load_config().api_key is None

    def test_default_file_in_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "config.yaml").write_text("go_directory: services\n")
        assert load_config().go_directory == "services"

    def test_default_file_skipped_when_disabled(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "config.yaml").write_text("go_directory: services\n")
        assert load_config(use_default=False).go_directory is None

    def test_explicit_path(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        other = tmp_path / "other.yaml"
        other.write_text("go_file_path: x.go\n")
        assert load_config(other).go_file_path == "x.go"
