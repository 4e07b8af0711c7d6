"""Tests for dependency installation (frontforge.scaffolder.install)."""

from __future__ import annotations

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from frontforge.scaffolder.install import InstallError, run_install


class _Lines:
    """Async iterator over a fixed list of byte lines."""

    def __init__(self, lines):
        self._lines = list(lines)

    def __aiter__(self):
        return self

    async def __anext__(self):
        if not self._lines:
            raise StopAsyncIteration
        return self._lines.pop(0)


def _process(lines=(), returncode=0):
    process = MagicMock()
    process.stdout = _Lines(lines)
    process.returncode = returncode
    process.wait = AsyncMock(return_value=returncode)
    process.kill = MagicMock()
    return process


class TestRunInstall:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_success_streams_output(self, project_dir, make_config):
        process = _process([b"added 120 packages\n", b"done\n"])
        with patch("asyncio.create_subprocess_exec", new_callable=AsyncMock, return_value=process) as spawn, \
             patch("frontforge.scaffolder.install.console") as mock_console:
            await run_install(project_dir, make_config(package_manager="pnpm"))

        args, kwargs = spawn.call_args
        assert args == ("pnpm", "install")
        assert kwargs["cwd"] == str(project_dir)
        printed = " ".join(str(c.args[0]) for c in mock_console.print.call_args_list)
        assert "added 120 packages" in printed

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_non_zero_exit(self, project_dir, make_config):
        process = _process([b"ERR!\n"], returncode=1)
        with patch("asyncio.create_subprocess_exec", new_callable=AsyncMock, return_value=process), \
             patch("frontforge.scaffolder.install.console"):
            with pytest.raises(InstallError, match="exit code 1") as exc_info:
                await run_install(project_dir, make_config())
        assert exc_info.value.exit_code == 1

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_spawn_failure(self, project_dir, make_config):
        with patch(
            "asyncio.create_subprocess_exec",
            new_callable=AsyncMock,
            side_effect=FileNotFoundError("npm"),
        ):
            with pytest.raises(InstallError, match="failed to start install"):
                await run_install(project_dir, make_config())

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_timeout_kills_process(self, project_dir, make_config):
        process = _process()
        with patch("asyncio.create_subprocess_exec", new_callable=AsyncMock, return_value=process), \
             patch("asyncio.wait_for", side_effect=asyncio.TimeoutError()):
            with pytest.raises(InstallError, match="timed out after 5s"):
                await run_install(project_dir, make_config(), timeout=5)
        process.kill.assert_called_once()
        process.wait.assert_awaited()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_unsupported_package_manager(self, project_dir):
        config = SimpleNamespace(package_manager="pip")
        with patch("asyncio.create_subprocess_exec", new_callable=AsyncMock) as spawn:
            with pytest.raises(InstallError, match="unsupported package manager: pip"):
                await run_install(project_dir, config)
        spawn.assert_not_called()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_timeout_when_child_already_exited(self, project_dir, make_config):
        process = _process()
        process.kill = MagicMock(side_effect=ProcessLookupError())
        with patch("asyncio.create_subprocess_exec", new_callable=AsyncMock, return_value=process), \
             patch("asyncio.wait_for", side_effect=asyncio.TimeoutError()):
            with pytest.raises(InstallError, match="timed out"):
                await run_install(project_dir, make_config(), timeout=5)
        process.wait.assert_awaited()
