"""Unit tests for ProcessRunner and ScaffoldError (frontforge.meta.runner).

Tests cover:
- ScaffoldError message formats and attributes
- tail_lines / format_command
- ProcessRunner.run: dry run, success, non-zero exit, spawn failure, timeout
- ProcessRunner.probe_version
"""

from __future__ import annotations

import asyncio
import shutil
import time
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from frontforge.config import Settings
from frontforge.meta.runner import ProcessRunner, ScaffoldError, format_command, tail_lines


# ---------------------------------------------------------------------------
# ScaffoldError
# ---------------------------------------------------------------------------


class TestScaffoldError:
    @pytest.mark.unit
    def test_message_with_command(self):
        err = ScaffoldError("Next.js", command="npx create-next-app", exit_code=1, stderr="boom")
        assert str(err) == "scaffold error for Next.js (exit 1): boom\nCommand: npx create-next-app"

    @pytest.mark.unit
    def test_message_without_command(self):
        err = ScaffoldError("Astro", stderr="no generator registered for framework")
        assert str(err) == "scaffold error for Astro: no generator registered for framework"
        assert err.exit_code == -1
        assert err.command == ""

    @pytest.mark.unit
    def test_attributes(self):
        err = ScaffoldError("SvelteKit", "npx sv create", 2, "bad")
        assert (err.framework, err.command, err.exit_code, err.stderr) == (
            "SvelteKit",
            "npx sv create",
            2,
            "bad",
        )


class TestHelpers:
    @pytest.mark.unit
    def test_tail_lines_keeps_last(self):
        text = "\n".join(f"line {i}" for i in range(100))
        tail = tail_lines(text, 50)
        assert tail.split("\n")[0] == "line 50"
        assert tail.split("\n")[-1] == "line 99"
        assert len(tail.split("\n")) == 50

    @pytest.mark.unit
    def test_tail_lines_short_text_unchanged(self):
        assert tail_lines("a\nb", 50) == "a\nb"

    @pytest.mark.unit
    def test_format_command(self):
        assert format_command("npx", ["sv", "add", "vitest"]) == "npx sv add vitest"


# ---------------------------------------------------------------------------
# ProcessRunner.run
# ---------------------------------------------------------------------------


class TestProcessRunnerRun:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_dry_run_spawns_nothing(self):
        runner = ProcessRunner()
        with patch("asyncio.create_subprocess_exec") as mock_exec:
            command = await runner.run(
                "npx", ["create-next-app@latest", "/tmp/app"], framework="Next.js", dry_run=True
            )
        mock_exec.assert_not_called()
        assert command == "npx create-next-app@latest /tmp/app"
        assert runner.commands == ["npx create-next-app@latest /tmp/app"]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_dry_run_reports_working_directory(self):
        runner = ProcessRunner()
        with patch("frontforge.meta.runner.console") as mock_console:
            await runner.run("npx", ["sv", "add"], framework="SvelteKit", cwd="/tmp/app", dry_run=True)
        printed = mock_console.print.call_args[0][0]
        assert "Would run:" in printed
        assert "(in /tmp/app)" in printed

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_success(self, mock_subprocess):
        proc = mock_subprocess(stdout="created", returncode=0)
        runner = ProcessRunner()
        with patch("asyncio.create_subprocess_exec", return_value=proc) as mock_exec:
            command = await runner.run("npm", ["install"], framework="Astro", cwd=Path("/tmp/app"))
        assert command == "npm install"
        assert mock_exec.call_args.kwargs["cwd"] == "/tmp/app"
        assert runner.commands == ["npm install"]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_non_zero_exit(self, mock_subprocess):
        stderr = "\n".join(f"err {i}" for i in range(80))
        proc = mock_subprocess(stdout="stdout noise", stderr=stderr, returncode=3)
        runner = ProcessRunner()
        with patch("asyncio.create_subprocess_exec", return_value=proc):
            with pytest.raises(ScaffoldError) as exc_info:
                await runner.run("npx", ["create-next-app@latest"], framework="Next.js")

        err = exc_info.value
        assert err.exit_code == 3
        assert err.command == "npx create-next-app@latest"
        assert err.framework == "Next.js"
        assert len(err.stderr.split("\n")) == 50
        assert err.stderr.endswith("err 79")
        assert "stdout noise" not in str(err)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_stderr_tail_follows_settings(self, mock_subprocess):
        proc = mock_subprocess(stderr="a\nb\nc\nd", returncode=1)
        runner = ProcessRunner(Settings(stderr_tail_lines=2))
        with patch("asyncio.create_subprocess_exec", return_value=proc):
            with pytest.raises(ScaffoldError) as exc_info:
                await runner.run("npx", [], framework="Astro")
        assert exc_info.value.stderr == "c\nd"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_spawn_failure(self):
        runner = ProcessRunner()
        with patch(
            "asyncio.create_subprocess_exec",
            side_effect=FileNotFoundError("No such file: npx"),
        ):
            with pytest.raises(ScaffoldError) as exc_info:
                await runner.run("npx", ["sv", "create"], framework="SvelteKit")
        assert exc_info.value.exit_code == -1
        assert "No such file" in exc_info.value.stderr
        assert exc_info.value.command == "npx sv create"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_timeout_kills_process(self):
        mock_process = AsyncMock()
        mock_process.kill = MagicMock()
        mock_process.wait = AsyncMock(return_value=-9)
        mock_process.communicate = MagicMock(return_value=None)

        runner = ProcessRunner(Settings(process_timeout=1))
        with patch("asyncio.create_subprocess_exec", return_value=mock_process):
            with patch("asyncio.wait_for", side_effect=asyncio.TimeoutError()):
                with pytest.raises(ScaffoldError) as exc_info:
                    await runner.run("npx", ["create-next-app@latest"], framework="Next.js")

        mock_process.kill.assert_called_once()
        mock_process.wait.assert_awaited()
        assert exc_info.value.exit_code == -1
        assert "timed out" in exc_info.value.stderr

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_timeout_when_child_already_exited(self):
        mock_process = AsyncMock()
        mock_process.kill = MagicMock(side_effect=ProcessLookupError())
        mock_process.wait = AsyncMock(return_value=0)
        mock_process.communicate = MagicMock(return_value=None)

        runner = ProcessRunner(Settings(process_timeout=1))
        with patch("asyncio.create_subprocess_exec", return_value=mock_process):
            with patch("asyncio.wait_for", side_effect=asyncio.TimeoutError()):
                with pytest.raises(ScaffoldError) as exc_info:
                    await runner.run("npx", ["create-next-app@latest"], framework="Next.js")

        mock_process.wait.assert_awaited()
        assert exc_info.value.exit_code == -1
        assert "timed out" in exc_info.value.stderr

    @pytest.mark.integration
    @pytest.mark.asyncio
    @pytest.mark.skipif(shutil.which("sleep") is None, reason="needs the sleep binary")
    async def test_real_timeout_terminates_child(self):
        runner = ProcessRunner(Settings(process_timeout=0.3))
        started = time.monotonic()
        with pytest.raises(ScaffoldError) as exc_info:
            await runner.run("sleep", ["5"], framework="Astro")
        assert time.monotonic() - started < 4
        assert exc_info.value.exit_code == -1
        assert exc_info.value.command == "sleep 5"


# ---------------------------------------------------------------------------
# ProcessRunner.probe_version
# ---------------------------------------------------------------------------


class TestProbeVersion:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_returns_trimmed_stdout(self, mock_subprocess):
        proc = mock_subprocess(stdout="v22.3.0\n", returncode=0)
        with patch("asyncio.create_subprocess_exec", return_value=proc):
            assert await ProcessRunner().probe_version("node", "--version") == "v22.3.0"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_failure_returns_none(self, mock_subprocess):
        proc = mock_subprocess(stdout="", returncode=1)
        with patch("asyncio.create_subprocess_exec", return_value=proc):
            assert await ProcessRunner().probe_version("node", "--version") is None

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_missing_binary_returns_none(self):
        with patch("asyncio.create_subprocess_exec", side_effect=FileNotFoundError()):
            assert await ProcessRunner().probe_version("nope") is None

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_probe_is_not_recorded(self, mock_subprocess):
        runner = ProcessRunner()
        with patch("asyncio.create_subprocess_exec", return_value=mock_subprocess(stdout="1")):
            await runner.probe_version("npx", "sv", "--version")
        assert runner.commands == []
