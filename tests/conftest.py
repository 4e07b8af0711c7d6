"""Shared pytest fixtures for the FrontForge test suite.

Provides reusable fixtures for:
- Temporary project directories
- Ready-made configurations (quick preset, per framework)
- A fake meta-framework generator that records the calls it receives
- Mock subprocess helpers
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from frontforge.config import Config, Framework, quick_preset
from frontforge.meta.registry import MetaGenerator, OptionMatrix, Registry
from frontforge.meta.runner import ProcessRunner
from frontforge.scaffolder.templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Absolute path of a project directory that does not exist yet."""
    return tmp_path / "my-app"


@pytest.fixture
def existing_project_dir(tmp_path: Path) -> Path:
    """An empty, already existing project directory."""
    path = tmp_path / "existing-app"
    path.mkdir()
    return path


@pytest.fixture
def package_json_dir(tmp_path: Path) -> Path:
    """Directory holding an upstream-style ``package.json``."""
    directory = tmp_path / "upstream"
    directory.mkdir()
    (directory / "package.json").write_text(
        json.dumps(
            {
                "name": "upstream",
                "dependencies": {"react": "^18.0.0"},
                "devDependencies": {"eslint": "^8.0.0"},
                "scripts": {"dev": "next dev"},
            },
            indent=2,
        ),
        encoding="utf-8",
    )
    return directory


# ---------------------------------------------------------------------------
# Configurations
# ---------------------------------------------------------------------------

@pytest.fixture
def quick_config(project_dir: Path) -> Config:
    """The quick preset pointed at ``project_dir``."""
    return quick_preset("my-app", project_path=project_dir)


@pytest.fixture
def make_config(project_dir: Path):
    """Factory for configs rooted at ``project_dir``.

    Usage:
        def test_vue(make_config):
            config = make_config(framework="Vue", language="JavaScript")
    """
    def factory(**overrides: Any) -> Config:
        values: dict[str, Any] = {"project_name": "my-app", "project_path": project_dir}
        values.update(overrides)
        return Config(**values)

    return factory


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


# ---------------------------------------------------------------------------
# Meta-framework fakes
# ---------------------------------------------------------------------------

class FakeMetaGenerator(MetaGenerator):
    """Records every call into a shared ``calls`` list."""

    framework = Framework.NEXTJS.value

    def __init__(
        self,
        calls: list[str] | None = None,
        scaffold_error: Exception | None = None,
        post_error: Exception | None = None,
    ):
        self.calls = calls if calls is not None else []
        self.scaffold_error = scaffold_error
        self.post_error = post_error

    async def scaffold(self, config: Config) -> None:
        self.calls.append("scaffold")
        if self.scaffold_error is not None:
            raise self.scaffold_error

    async def post_scaffold(self, config: Config) -> None:
        self.calls.append("post_scaffold")
        if self.post_error is not None:
            raise self.post_error

    def supported_options(self) -> OptionMatrix:
        return OptionMatrix(styling=("Tailwind CSS",), testing=None)

    async def probe_version(self) -> str | None:
        return "1.0.0"


@pytest.fixture
def make_meta_generator():
    """Factory for :class:`FakeMetaGenerator` instances."""
    return FakeMetaGenerator


@pytest.fixture
def fake_meta_generator() -> FakeMetaGenerator:
    return FakeMetaGenerator()


@pytest.fixture
def fake_registry(fake_meta_generator: FakeMetaGenerator) -> Registry:
    registry = Registry()
    registry.register(Framework.NEXTJS.value, fake_meta_generator)
    return registry


@pytest.fixture
def mock_runner() -> MagicMock:
    """A ``ProcessRunner`` stand-in whose ``run`` is an ``AsyncMock``."""
    runner = MagicMock(spec=ProcessRunner)
    runner.commands = []
    runner.run = AsyncMock(return_value="")
    runner.probe_version = AsyncMock(return_value="1.0.0")
    return runner


# ---------------------------------------------------------------------------
# Mock Subprocess
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess for testing command execution.

    Returns a factory that creates mock subprocess instances with configurable
    stdout, stderr, and return codes.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(stdout="output", returncode=0)
            with patch("asyncio.create_subprocess_exec", return_value=proc):
                ...
    """
    def factory(
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.communicate = AsyncMock(
            return_value=(stdout.encode("utf-8"), stderr.encode("utf-8"))
        )
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.kill = MagicMock()
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory
