"""External process execution for meta-framework scaffolding.

Runs upstream generator CLIs (``create-next-app``, ``create astro``, ``sv``)
with a hard timeout, capturing exit code and a bounded tail of stderr.  In
dry-run mode the command is reported and recorded but never spawned.
"""

from __future__ import annotations

import asyncio
import contextlib
from pathlib import Path

from rich.markup import escape

from frontforge.config import Settings
from frontforge.utils import console


class ScaffoldError(Exception):
    """Raised when an upstream scaffolding CLI fails.

    Attributes:
        framework: Framework label the command was run for.
        command: Full command line, or ``""`` when nothing was run.
        exit_code: Process exit code; ``-1`` if it never started or was killed.
        stderr: The trailing lines of the process's stderr.
    """

    def __init__(
        self,
        framework: str,
        command: str = "",
        exit_code: int = -1,
        stderr: str = "",
    ):
        self.framework = framework
        self.command = command
        self.exit_code = exit_code
        self.stderr = stderr
        if command:
            message = (
                f"scaffold error for {framework} (exit {exit_code}): {stderr}\n"
                f"Command: {command}"
            )
        else:
            message = f"scaffold error for {framework}: {stderr}"
        super().__init__(message)


def tail_lines(text: str, limit: int) -> str:
    """Return the last *limit* newline-separated lines of *text*."""
    lines = text.split("\n")
    if len(lines) > limit:
        lines = lines[-limit:]
    return "\n".join(lines)


def format_command(name: str, args: list[str] | tuple[str, ...]) -> str:
    """Render a program and its arguments as one display string."""
    return " ".join([name, *args])


class ProcessRunner:
    """Runs upstream CLIs on behalf of meta-framework generators.

    Every command requested through :meth:`run` is appended to
    :attr:`commands`, whether it was executed or only reported in dry-run mode.
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or Settings()
        self.commands: list[str] = []

    async def run(
        self,
        name: str,
        args: list[str],
        *,
        framework: str,
        cwd: str | Path | None = None,
        dry_run: bool = False,
    ) -> str:
        """Run ``name args...`` and return the command string.

        Args:
            name: Program to execute (looked up on ``PATH``).
            args: Program arguments.
            framework: Framework label used in error reports.
            cwd: Working directory for the child process.
            dry_run: Only print and record the command.

        Raises:
            ScaffoldError: On spawn failure, timeout or a non-zero exit.
        """
        command = format_command(name, args)
        self.commands.append(command)

        if dry_run:
            suffix = f" (in {cwd})" if cwd is not None else ""
            console.print(f"[cyan]Would run:[/cyan] {escape(command)}{escape(suffix)}")
            return command

        console.print(f"[dim]$ {escape(command)}[/dim]")

        try:
            process = await asyncio.create_subprocess_exec(
                name,
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=str(cwd) if cwd is not None else None,
            )
        except OSError as exc:
            raise ScaffoldError(
                framework, command=command, exit_code=-1, stderr=str(exc)
            ) from exc

        try:
            _, stderr_bytes = await asyncio.wait_for(
                process.communicate(), timeout=self.settings.process_timeout
            )
        except asyncio.TimeoutError:
            with contextlib.suppress(ProcessLookupError):
                process.kill()
            await process.wait()
            raise ScaffoldError(
                framework,
                command=command,
                exit_code=-1,
                stderr=f"command timed out after {self.settings.process_timeout:g}s",
            )

        if process.returncode != 0:
            stderr_text = (stderr_bytes or b"").decode("utf-8", errors="replace")
            raise ScaffoldError(
                framework,
                command=command,
                exit_code=process.returncode if process.returncode is not None else -1,
                stderr=tail_lines(stderr_text, self.settings.stderr_tail_lines),
            )

        return command

    async def probe_version(self, name: str, *args: str) -> str | None:
        """Return the trimmed stdout of ``name args...`` or ``None`` on failure.

        Used to report the installed version of an upstream CLI.  Any failure
        (missing binary, non-zero exit, timeout) is treated as "unknown".
        """
        try:
            process = await asyncio.create_subprocess_exec(
                name,
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.DEVNULL,
            )
        except OSError:
            return None

        try:
            stdout_bytes, _ = await asyncio.wait_for(
                process.communicate(), timeout=self.settings.probe_timeout
            )
        except asyncio.TimeoutError:
            with contextlib.suppress(ProcessLookupError):
                process.kill()
            await process.wait()
            return None

        if process.returncode != 0:
            return None
        return (stdout_bytes or b"").decode("utf-8", errors="replace").strip()
