#
# tests/unit/test_config.py
#
"""
Tests for configuration loading and parser construction.
"""

from pathlib import Path

import pytest

from xcstream.config import GlobalConfig, ParserConfig, XcstreamConfig, load_config
from xcstream.exceptions import ConfigurationError
from xcstream.parsing import (
    DARWIN_DIALECT,
    NON_DARWIN_DIALECT,
    ParallelXCTestOutputParser,
    ToolchainVersion,
    XCTestOutputParser,
    get_output_parser,
)


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    for env_var in ("XCSTREAM_DIALECT", "XCSTREAM_TOOLCHAIN_VERSION"):
        monkeypatch.delenv(env_var, raising=False)


@pytest.fixture
def write_config(tmp_path: Path):
    def _write(content: str) -> Path:
        path = tmp_path / "xcstream.toml"
        path.write_text(content)
        return path

    return _write


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults_without_file(self) -> None:
        assert load_config() == XcstreamConfig()
        assert load_config().parser == ParserConfig(dialect="auto", parallel=False, chunk_size=4096)

    def test_full_file(self, write_config) -> None:
        path = write_config(
            """
[global]
log_level = "DEBUG"

[parser]
dialect = "linux"
parallel = true
toolchain_version = "6.0.1"
chunk_size = 128
"""
        )

        config = load_config(path)

        assert config.global_config == GlobalConfig(log_level="DEBUG")
        assert config.global_config.numeric_log_level == 10
        assert config.parser == ParserConfig(
            dialect="linux", parallel=True, toolchain_version="6.0.1", chunk_size=128
        )

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(tmp_path / "missing.toml")

    def test_invalid_toml(self, write_config) -> None:
        with pytest.raises(ConfigurationError, match="Invalid TOML"):
            load_config(write_config("[parser\n"))

    def test_unknown_section(self, write_config) -> None:
        with pytest.raises(ConfigurationError, match=r"Unknown section\(s\): \['repositories'\]"):
            load_config(write_config("[repositories]\n"))

    def test_unknown_key(self, write_config) -> None:
        with pytest.raises(ConfigurationError, match=r"Unknown key\(s\) in \[parser\]: \['dialects'\]"):
            load_config(write_config('[parser]\ndialects = "linux"\n'))

    def test_parser_not_a_table(self, write_config) -> None:
        with pytest.raises(ConfigurationError, match="must be a table"):
            load_config(write_config('parser = "linux"\n'))

    @pytest.mark.parametrize(
        "content",
        [
            '[parser]\ndialect = "windows"\n',
            "[parser]\nchunk_size = 0\n",
            "[parser]\nchunk_size = true\n",
            '[global]\nlog_level = "LOUD"\n',
            "[global]\nlog_level = 10\n",
            "[parser]\ndialect = 5\n",
            '[parser]\nparallel = "yes"\n',
            "[parser]\ntoolchain_version = 6.0\n",
        ],
    )
    def test_invalid_values(self, write_config, content: str) -> None:
        path = write_config(content)

        with pytest.raises(ConfigurationError, match="Invalid value") as exc_info:
            load_config(path)
        assert exc_info.value.path == str(path)

    def test_env_overrides_file(self, write_config, monkeypatch) -> None:
        path = write_config('[parser]\ndialect = "linux"\ntoolchain_version = "5.9"\n')
        monkeypatch.setenv("XCSTREAM_DIALECT", "darwin")
        monkeypatch.setenv("XCSTREAM_TOOLCHAIN_VERSION", "6.0")

        config = load_config(path)

        assert config.parser.dialect == "darwin"
        assert config.parser.toolchain_version == "6.0"

    def test_env_override_is_validated(self, monkeypatch) -> None:
        monkeypatch.setenv("XCSTREAM_DIALECT", "plan9")

        with pytest.raises(ConfigurationError, match="Invalid dialect 'plan9'"):
            load_config()


class TestGetOutputParser:
    """Tests for the parser factory."""

    def test_sequential_parser(self) -> None:
        parser = get_output_parser(ParserConfig(dialect="darwin"))

        assert type(parser) is XCTestOutputParser
        assert parser.dialect is DARWIN_DIALECT

    def test_parallel_parser(self) -> None:
        parser = get_output_parser(ParserConfig(dialect="linux", parallel=True, toolchain_version="5.10"))

        assert isinstance(parser, ParallelXCTestOutputParser)
        assert parser.dialect is NON_DARWIN_DIALECT
        assert parser.toolchain_version == ToolchainVersion(5, 10, 0)

    def test_parallel_parser_without_version(self) -> None:
        parser = get_output_parser(ParserConfig(dialect="linux", parallel=True))

        assert parser.toolchain_version is None

    def test_version_ignored_when_not_parallel(self) -> None:
        assert type(get_output_parser(ParserConfig(dialect="linux", toolchain_version="nonsense"))) is XCTestOutputParser

    def test_invalid_version(self) -> None:
        with pytest.raises(ConfigurationError, match="Invalid toolchain version: 'latest'"):
            get_output_parser(ParserConfig(parallel=True, toolchain_version="latest"))

# 🔼⚙️
