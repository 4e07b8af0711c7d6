"""Environment readiness checks run before generation.

Each check returns a :class:`CheckResult`.  A failed check is a warning unless
it is marked ``fatal``; the CLI refuses to generate when any fatal check fails.
Dry runs skip preflight entirely.
"""

from __future__ import annotations

import re
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from rich.markup import escape

from frontforge.config import Config, PackageManager, Settings
from frontforge.meta.runner import ProcessRunner
from frontforge.scaffolder.paths import PathError, validate_path_safety
from frontforge.utils import console

MIN_NODE_VERSION: tuple[int, int, int] = (20, 19, 0)
RECOMMENDED_DISK_SPACE_MB = 1024

_VERSION_RE = re.compile(r"^(\d+)\.(\d+)\.(\d+)")

_PM_INSTALL_HINTS: dict[str, str] = {
    PackageManager.NPM.value: "npm is bundled with Node.js. Install Node.js from https://nodejs.org",
    PackageManager.YARN.value: "Install yarn: npm install -g yarn or visit https://yarnpkg.com",
    PackageManager.PNPM.value: "Install pnpm: npm install -g pnpm or visit https://pnpm.io",
    PackageManager.BUN.value: "Install bun: curl -fsSL https://bun.sh/install | bash or visit https://bun.sh",
}


@dataclass
class CheckResult:
    name: str
    passed: bool
    message: str = ""
    suggestion: str = ""
    fatal: bool = False


@dataclass
class PreflightResults:
    checks: list[CheckResult] = field(default_factory=list)

    @property
    def all_passed(self) -> bool:
        return all(check.passed for check in self.checks)

    @property
    def fatal_error(self) -> bool:
        return any(not check.passed and check.fatal for check in self.checks)


# ---------------------------------------------------------------------------
# Version helpers
# ---------------------------------------------------------------------------


def parse_node_version(version: str) -> tuple[int, int, int]:
    """Parse ``v20.19.0`` (the ``v`` is optional) into a tuple.

    Raises:
        ValueError: If *version* does not start with ``major.minor.patch``.
    """
    match = _VERSION_RE.match(version.strip().removeprefix("v"))
    if match is None:
        raise ValueError(f"invalid version format: {version}")
    major, minor, patch = (int(part) for part in match.groups())
    return major, minor, patch


def meets_minimum_version(version: tuple[int, int, int]) -> bool:
    return version >= MIN_NODE_VERSION


def _min_version_label() -> str:
    return "v" + ".".join(str(part) for part in MIN_NODE_VERSION)


# ---------------------------------------------------------------------------
# Individual checks
# ---------------------------------------------------------------------------


async def check_nodejs(runner: ProcessRunner) -> CheckResult:
    name = "Node.js Installation"
    node = shutil.which("node")
    if node is None:
        return CheckResult(
            name, False, "Node.js not found",
            f"Install Node.js {_min_version_label()} or higher from https://nodejs.org",
            fatal=True,
        )

    version = await runner.probe_version(node, "--version")
    if version is None:
        return CheckResult(
            name, False, "Failed to check Node.js version", "Verify Node.js installation", fatal=True
        )

    try:
        parsed = parse_node_version(version)
    except ValueError:
        return CheckResult(
            name, False, f"Invalid Node.js version format: {version}",
            "Reinstall Node.js from https://nodejs.org", fatal=True,
        )

    if not meets_minimum_version(parsed):
        return CheckResult(
            name, False, f"Node.js {version} found (requires {_min_version_label()}+)",
            f"Update Node.js to {_min_version_label()} or higher", fatal=True,
        )
    return CheckResult(name, True, f"Node.js {version}", fatal=True)


async def check_package_manager(package_manager: str, runner: ProcessRunner) -> CheckResult:
    name = f"Package Manager ({package_manager})"
    if package_manager not in _PM_INSTALL_HINTS:
        return CheckResult(
            name, False, f"Unknown package manager: {package_manager}",
            "Select a valid package manager (npm, yarn, pnpm, or bun)", fatal=True,
        )

    binary = shutil.which(package_manager)
    if binary is None:
        return CheckResult(
            name, False, f"{package_manager} not found", _PM_INSTALL_HINTS[package_manager], fatal=True
        )

    version = await runner.probe_version(binary, "--version")
    if version is None:
        return CheckResult(
            name, False, f"Failed to check {package_manager} version",
            f"Verify {package_manager} installation", fatal=True,
        )
    return CheckResult(name, True, f"{package_manager} v{version}", fatal=True)


def check_directory_conflicts(project_path: str | Path | None) -> CheckResult:
    """A missing or empty directory passes; a populated one is a soft failure."""
    name = "Directory Check"
    if not project_path:
        return CheckResult(
            name, False, "Project path not specified",
            "Enter a project name or specify a path with --path", fatal=True,
        )

    target = Path(project_path).absolute()
    try:
        validate_path_safety(target)
    except PathError as exc:
        return CheckResult(
            name, False, exc.message, "Choose a path in your home or project directory", fatal=True
        )

    if not target.exists():
        return CheckResult(name, True, f"Target: {target.name} (new directory)")
    if not target.is_dir():
        return CheckResult(
            name, False, f"Path exists but is not a directory: {target}",
            "Choose a different path or remove the existing file", fatal=True,
        )

    try:
        count = sum(1 for _ in target.iterdir())
    except OSError as exc:
        return CheckResult(
            name, False, f"Cannot read directory: {exc}", "Check directory permissions", fatal=True
        )

    if count == 0:
        return CheckResult(name, True, f"Target: {target.name} (empty directory)")
    return CheckResult(
        name, False, f"Directory already exists with {count} file(s)",
        "Choose a different directory name or remove existing files",
    )


def check_disk_space(project_path: str | Path | None, min_space_mb: int = 500) -> CheckResult:
    """Insufficient space is fatal; being unable to measure it is not."""
    name = "Disk Space"
    target = Path(project_path or ".").absolute()
    probe = target if target.exists() else target.parent

    try:
        usage = shutil.disk_usage(probe)
    except OSError as exc:
        return CheckResult(name, False, f"Cannot check disk space: {exc}", "Verify path permissions")

    available_mb = usage.free / (1024 * 1024)
    if available_mb < min_space_mb:
        return CheckResult(
            name, False,
            f"Insufficient disk space: {available_mb:.1f} MB available (requires {min_space_mb} MB)",
            "Free up disk space before continuing", fatal=True,
        )
    if available_mb < RECOMMENDED_DISK_SPACE_MB:
        return CheckResult(
            name, True,
            f"Limited disk space: {available_mb:.1f} MB available "
            f"({RECOMMENDED_DISK_SPACE_MB / 1024:.1f} GB recommended)",
            "Consider freeing up more space for optimal performance",
        )
    return CheckResult(name, True, f"Disk space: {available_mb / 1024:.1f} GB available")


# ---------------------------------------------------------------------------
# Aggregate
# ---------------------------------------------------------------------------


async def run_all_checks(
    config: Config,
    settings: Settings | None = None,
    runner: ProcessRunner | None = None,
) -> PreflightResults:
    """Run every check in order and collect the results."""
    settings = settings or Settings()
    runner = runner or ProcessRunner(settings)
    project_path = config.resolved_path()

    results = PreflightResults()
    results.checks.append(await check_nodejs(runner))
    results.checks.append(await check_package_manager(config.package_manager, runner))
    results.checks.append(check_directory_conflicts(project_path))
    results.checks.append(check_disk_space(project_path, settings.min_disk_space_mb))
    return results


def print_results(results: PreflightResults) -> None:
    console.print("[bold]Pre-flight checks[/bold]")
    for check in results.checks:
        if check.passed:
            console.print(f"  [green]✓[/green] {escape(check.name)}: {escape(check.message)}")
            continue
        colour = "red" if check.fatal else "yellow"
        console.print(f"  [{colour}]✗[/{colour}] {escape(check.name)}: {escape(check.message)}")
        if check.suggestion:
            console.print(f"    [dim]{escape(check.suggestion)}[/dim]")
