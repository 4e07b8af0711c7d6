"""Dependency installation after generation."""

from __future__ import annotations

import asyncio
import contextlib
from pathlib import Path

from rich.markup import escape

from frontforge.config import Config, PackageManager
from frontforge.utils import console


class InstallError(Exception):
    """Raised when ``<pm> install`` cannot start or exits non-zero."""

    def __init__(self, message: str, exit_code: int = -1):
        self.exit_code = exit_code
        super().__init__(message)


_SUPPORTED = {pm.value for pm in PackageManager}


async def run_install(
    project_path: str | Path,
    config: Config,
    timeout: float = 600.0,
) -> None:
    """Run ``<package manager> install`` in *project_path*.

    Output (stdout and stderr merged) is streamed to the console line by line
    as it arrives.

    Raises:
        InstallError: On unsupported package manager, spawn failure, timeout
            or a non-zero exit status.
    """
    manager = config.package_manager
    if manager not in _SUPPORTED:
        raise InstallError(f"unsupported package manager: {manager}")

    try:
        process = await asyncio.create_subprocess_exec(
            manager,
            "install",
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.STDOUT,
            cwd=str(project_path),
        )
    except OSError as exc:
        raise InstallError(f"failed to start install: {exc}") from exc

    assert process.stdout is not None  # guaranteed by PIPE

    async def _stream() -> None:
        async for line in process.stdout:
            console.print(f"  [dim]{escape(line.decode('utf-8', errors='replace').rstrip())}[/dim]")
        await process.wait()

    try:
        await asyncio.wait_for(_stream(), timeout=timeout)
    except asyncio.TimeoutError:
        with contextlib.suppress(ProcessLookupError):
            process.kill()
        await process.wait()
        raise InstallError(f"install timed out after {timeout:g}s")

    if process.returncode != 0:
        raise InstallError(
            f"install failed with exit code {process.returncode}",
            exit_code=process.returncode if process.returncode is not None else -1,
        )
