"""Tests for configuration loading."""

from pathlib import Path

import pytest

from mmpolicy.config import (
    ConfigError,
    EnvReader,
    get_config,
    get_default_config_path,
    get_tool_path,
    load_config_file,
)
from mmpolicy.config.loader import DEFAULT_CONFIG_FILE


class TestGetDefaultConfigPath:
    """Tests for get_default_config_path()."""

    def test_default_location(self):
        """Without override the file lives in ~/.mmpolicy."""
        assert get_default_config_path(EnvReader(env={})) == DEFAULT_CONFIG_FILE

    def test_env_override(self, tmp_path: Path):
        """MMPOLICY_CONFIG_PATH overrides the location."""
        env = EnvReader(env={"MMPOLICY_CONFIG_PATH": str(tmp_path / "c.toml")})

        assert get_default_config_path(env) == tmp_path / "c.toml"


class TestLoadConfigFile:
    """Tests for load_config_file()."""

    def test_missing_file_is_empty(self, tmp_path: Path):
        """A missing file yields an empty dict."""
        assert load_config_file(tmp_path / "missing.toml") == {}

    def test_parses_toml(self, tmp_path: Path):
        """Sections and values are parsed."""
        path = tmp_path / "config.toml"
        path.write_text('[tools]\nmmapplypolicy = "/opt/mm"\n')

        assert load_config_file(path) == {"tools": {"mmapplypolicy": "/opt/mm"}}

    def test_invalid_toml_raises(self, tmp_path: Path):
        """Malformed files raise ConfigError."""
        path = tmp_path / "config.toml"
        path.write_text("[tools\n")

        with pytest.raises(ConfigError):
            load_config_file(path)


class TestGetConfig:
    """Tests for get_config() precedence."""

    def test_defaults(self, tmp_path: Path):
        """No file and no env give defaults."""
        config = get_config(config_path=tmp_path / "none.toml", env=EnvReader(env={}))

        assert config.tools.mmapplypolicy is None
        assert config.logging.level == "info"
        assert config.logging.format == "text"
        assert config.logging.file is None

    def test_file_values(self, tmp_path: Path):
        """Values from the config file are used."""
        path = tmp_path / "config.toml"
        path.write_text(
            '[tools]\nmmapplypolicy = "/opt/mm/bin/mmapplypolicy"\n'
            '[logging]\nlevel = "debug"\nformat = "json"\n'
        )

        config = get_config(config_path=path, env=EnvReader(env={}))

        assert config.tools.mmapplypolicy == Path("/opt/mm/bin/mmapplypolicy")
        assert config.logging.level == "debug"
        assert config.logging.format == "json"

    def test_env_overrides_file(self, tmp_path: Path):
        """Environment variables take precedence over the file."""
        path = tmp_path / "config.toml"
        path.write_text('[logging]\nlevel = "debug"\n')
        env = EnvReader(
            env={
                "MMPOLICY_LOG_LEVEL": "warning",
                "MMPOLICY_MMAPPLYPOLICY_PATH": str(tmp_path),
                "MMPOLICY_LOG_FILE": str(tmp_path / "mm.log"),
            }
        )

        config = get_config(config_path=path, env=env)

        assert config.logging.level == "warning"
        assert config.tools.mmapplypolicy == tmp_path
        assert config.logging.file == tmp_path / "mm.log"

    def test_cli_overrides_env(self, tmp_path: Path):
        """Function arguments take precedence over the environment."""
        env = EnvReader(env={"MMPOLICY_LOG_LEVEL": "warning"})

        config = get_config(
            config_path=tmp_path / "none.toml",
            log_level="error",
            log_format="json",
            mmapplypolicy_path=Path("/cli/mmapplypolicy"),
            env=env,
        )

        assert config.logging.level == "error"
        assert config.logging.format == "json"
        assert config.tools.mmapplypolicy == Path("/cli/mmapplypolicy")

    def test_invalid_level_raises(self, tmp_path: Path):
        """Invalid logging values raise ConfigError."""
        env = EnvReader(env={"MMPOLICY_LOG_LEVEL": "loud"})

        with pytest.raises(ConfigError, match="level"):
            get_config(config_path=tmp_path / "none.toml", env=env)

    @pytest.mark.parametrize(
        "content",
        [
            'tools = "x"\n',
            "[tools]\nmmapplypolicy = 5\n",
            "[logging]\nlevel = 5\n",
            '[logging]\nmax_bytes = "big"\n',
            "[logging]\nbackup_count = true\n",
            '[logging]\ninclude_stderr = "yes"\n',
        ],
    )
    def test_wrongly_typed_values_raise(self, tmp_path: Path, content: str):
        """Values of the wrong TOML type raise ConfigError."""
        path = tmp_path / "config.toml"
        path.write_text(content)

        with pytest.raises(ConfigError):
            get_config(config_path=path, env=EnvReader(env={}))

    def test_include_stderr_from_env(self, tmp_path: Path):
        """MMPOLICY_LOG_INCLUDE_STDERR overrides the file setting."""
        path = tmp_path / "config.toml"
        path.write_text("[logging]\ninclude_stderr = false\n")
        env = EnvReader(env={"MMPOLICY_LOG_INCLUDE_STDERR": "on"})

        config = get_config(config_path=path, env=env)

        assert config.logging.include_stderr is True

    def test_include_stderr_from_file(self, tmp_path: Path):
        """include_stderr is read from [logging] when the env is silent."""
        path = tmp_path / "config.toml"
        path.write_text("[logging]\ninclude_stderr = true\nbackup_count = 2\n")

        config = get_config(config_path=path, env=EnvReader(env={}))

        assert config.logging.include_stderr is True
        assert config.logging.backup_count == 2


class TestGetToolPath:
    """Tests for get_tool_path()."""

    def test_env_wins(self, tmp_path: Path):
        """MMPOLICY_MMAPPLYPOLICY_PATH is used without reading the file."""
        path = tmp_path / "config.toml"
        path.write_text("[tools\n")
        env = EnvReader(env={"MMPOLICY_MMAPPLYPOLICY_PATH": str(tmp_path)})

        assert get_tool_path(config_path=path, env=env) == tmp_path

    def test_logging_section_is_ignored(self, tmp_path: Path):
        """An invalid [logging] section does not prevent tool lookup."""
        path = tmp_path / "config.toml"
        path.write_text(
            '[tools]\nmmapplypolicy = "/opt/mm/mmapplypolicy"\n'
            '[logging]\nlevel = "verbose"\n'
        )

        assert get_tool_path(config_path=path, env=EnvReader(env={})) == Path(
            "/opt/mm/mmapplypolicy"
        )

    def test_unset(self, tmp_path: Path):
        """Without env or file the tool is looked up in PATH."""
        assert get_tool_path(tmp_path / "none.toml", EnvReader(env={})) is None

    def test_invalid_tools_section(self, tmp_path: Path):
        """A non-table [tools] raises ConfigError."""
        path = tmp_path / "config.toml"
        path.write_text('tools = "x"\n')

        with pytest.raises(ConfigError, match="tools"):
            get_tool_path(config_path=path, env=EnvReader(env={}))


class TestEnvReader:
    """Tests for EnvReader."""

    def test_get_str_treats_empty_as_unset(self):
        """Empty strings fall back to the default."""
        reader = EnvReader(env={"A": "", "B": "x"})

        assert reader.get_str("A", "default") == "default"
        assert reader.get_str("B") == "x"
        assert reader.get_str("C") is None

    def test_get_bool(self):
        """Common true spellings are recognized."""
        reader = EnvReader(env={"T": "Yes", "F": "off"})

        assert reader.get_bool("T") is True
        assert reader.get_bool("F") is False
        assert reader.get_bool("MISSING", default=True) is True

    def test_get_path_expands_user(self):
        """Paths have ~ expanded and are returned even if missing."""
        reader = EnvReader(env={"P": "~/does-not-exist"})

        path = reader.get_path("P")

        assert path == Path.home() / "does-not-exist"
