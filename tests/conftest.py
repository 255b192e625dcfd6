"""Pytest fixtures for simplecli tests."""

import io
import logging
import tempfile
import textwrap
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from simplecli.config import reset_config
from simplecli.config.schema import SimpleCLIConfig
from simplecli.output.plain import PlainFormatter
from simplecli.primitives import Primitives
from simplecli.script.environment import ScriptEnvironment


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def restore_simplecli_logger() -> Generator[None, None, None]:
    """Leave the package logger as the test found it (CLI runs call setup_logging)."""
    logger = logging.getLogger("simplecli")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


@pytest.fixture(autouse=True)
def reset_config_fixture(
    temp_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[None, None, None]:
    """Reset config singleton and keep tests away from the user's config file."""
    monkeypatch.setenv("SIMPLECLI_CONFIG", str(temp_dir / "no-such-config.toml"))
    for name in ("SIMPLECLI_LOG_LEVEL", "SIMPLECLI_PROMPT", "SIMPLECLI_HISTORY"):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def default_config() -> SimpleCLIConfig:
    """Get default configuration."""
    return SimpleCLIConfig()


@pytest.fixture
def stdout() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def stderr() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def formatter(stdout: io.StringIO, stderr: io.StringIO) -> PlainFormatter:
    """A plain formatter writing to in-memory streams."""
    return PlainFormatter(stream=stdout, error_stream=stderr)


@pytest.fixture
def write_script(temp_dir: Path) -> Callable[[str], Path]:
    """Write dedented script source to a file and return its path."""

    def _write(source: str, name: str = "script.py") -> Path:
        path = temp_dir / name
        path.write_text(textwrap.dedent(source))
        return path

    return _write


@pytest.fixture
def make_env(
    formatter: PlainFormatter, default_config: SimpleCLIConfig
) -> Callable[[str], ScriptEnvironment]:
    """Build a loaded environment with the primitives installed."""

    def _make(source: str) -> ScriptEnvironment:
        env = ScriptEnvironment()
        env.install(Primitives(env, formatter, default_config).bindings())
        env.load_source(textwrap.dedent(source))
        return env

    return _make
