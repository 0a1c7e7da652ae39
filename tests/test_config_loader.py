"""Tests for bbserve.config_loader — file, environment and override merging."""

from __future__ import annotations

from pathlib import Path

import pytest

from bbserve._errors import ConfigError
from bbserve.config_loader import PORT_ENV_VAR, load_config


class TestDefaults:
    """No file, no environment."""

    def test_empty_root(self, tmp_path: Path) -> None:
        config = load_config(tmp_path, environ={})
        assert config.port == 3000
        assert config.root == tmp_path

    def test_empty_port_env_ignored(self, tmp_path: Path) -> None:
        config = load_config(tmp_path, environ={PORT_ENV_VAR: ""})
        assert config.port == 3000


class TestPortEnvironment:
    """The PORT environment variable."""

    def test_port_from_env(self, tmp_path: Path) -> None:
        config = load_config(tmp_path, environ={"PORT": "8080"})
        assert config.port == 8080

    def test_non_integer_port(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="PORT must be an integer"):
            load_config(tmp_path, environ={"PORT": "eighty"})

    def test_out_of_range_port(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="port"):
            load_config(tmp_path, environ={"PORT": "70000"})

    def test_env_beats_file(self, tmp_path: Path) -> None:
        (tmp_path / "bbserve.yaml").write_text("port: 4000\n")
        config = load_config(tmp_path, environ={"PORT": "5000"})
        assert config.port == 5000

    def test_override_beats_env(self, tmp_path: Path) -> None:
        config = load_config(tmp_path, environ={"PORT": "5000"}, port=6000)
        assert config.port == 6000

    def test_none_override_ignored(self, tmp_path: Path) -> None:
        config = load_config(tmp_path, environ={"PORT": "5000"}, port=None, host=None)
        assert config.port == 5000
        assert config.host == "127.0.0.1"

    def test_reads_process_environment(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("PORT", "9123")
        assert load_config(tmp_path).port == 9123


class TestConfigFiles:
    """bbserve.yaml / bbserve.yml / bbserve.toml."""

    def test_yaml_top_level(self, tmp_path: Path) -> None:
        (tmp_path / "bbserve.yaml").write_text(
            "host: 0.0.0.0\nport: 4000\ntemplated: false\n"
        )
        config = load_config(tmp_path, environ={})
        assert config.host == "0.0.0.0"
        assert config.port == 4000
        assert config.templated is False

    def test_yml_extension(self, tmp_path: Path) -> None:
        (tmp_path / "bbserve.yml").write_text("workers: 4\n")
        assert load_config(tmp_path, environ={}).workers == 4

    def test_yaml_section(self, tmp_path: Path) -> None:
        (tmp_path / "bbserve.yaml").write_text(
            "site: ignored\nbbserve:\n  port: 4100\n  probes: true\n"
        )
        config = load_config(tmp_path, environ={})
        assert config.port == 4100
        assert config.probes is True

    def test_yaml_cors_list(self, tmp_path: Path) -> None:
        (tmp_path / "bbserve.yaml").write_text(
            "cors_origins:\n  - https://bbcode.tech\n"
        )
        config = load_config(tmp_path, environ={})
        assert config.cors_origins == ("https://bbcode.tech",)

    def test_toml(self, tmp_path: Path) -> None:
        (tmp_path / "bbserve.toml").write_text(
            '[bbserve]\nport = 4200\nstatic_dir = "assets"\n'
        )
        config = load_config(tmp_path, environ={})
        assert config.port == 4200
        assert config.static_dir == "assets"

    def test_yaml_preferred_over_toml(self, tmp_path: Path) -> None:
        (tmp_path / "bbserve.yaml").write_text("port: 4300\n")
        (tmp_path / "bbserve.toml").write_text("port = 4400\n")
        assert load_config(tmp_path, environ={}).port == 4300

    def test_unknown_keys_ignored(self, tmp_path: Path) -> None:
        (tmp_path / "bbserve.yaml").write_text("port: 4500\ntheme: dark\n")
        assert load_config(tmp_path, environ={}).port == 4500

    def test_malformed_yaml_falls_back_to_defaults(self, tmp_path: Path) -> None:
        (tmp_path / "bbserve.yaml").write_text("port: [unclosed\n")
        assert load_config(tmp_path, environ={}).port == 3000

    def test_malformed_toml_falls_back_to_defaults(self, tmp_path: Path) -> None:
        (tmp_path / "bbserve.toml").write_text("port = = 1\n")
        assert load_config(tmp_path, environ={}).port == 3000

    def test_undecodable_yaml_falls_back_to_defaults(self, tmp_path: Path) -> None:
        (tmp_path / "bbserve.yaml").write_bytes(b"port: 4000\n# \xff\xfe\n")
        assert load_config(tmp_path, environ={}).port == 3000

    def test_undecodable_toml_falls_back_to_defaults(self, tmp_path: Path) -> None:
        (tmp_path / "bbserve.toml").write_bytes(b"port = 4000\n# \xff\xfe\n")
        assert load_config(tmp_path, environ={}).port == 3000

    def test_non_mapping_yaml_ignored(self, tmp_path: Path) -> None:
        (tmp_path / "bbserve.yaml").write_text("- just\n- a list\n")
        assert load_config(tmp_path, environ={}).port == 3000

    def test_wrong_type_in_file_raises(self, tmp_path: Path) -> None:
        (tmp_path / "bbserve.yaml").write_text("port: lots\n")
        with pytest.raises(ConfigError):
            load_config(tmp_path, environ={})
