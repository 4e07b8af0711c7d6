"""Tests for environment readiness checks (frontforge.preflight)."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import patch

import pytest

from frontforge.preflight import (
    CheckResult,
    PreflightResults,
    check_directory_conflicts,
    check_disk_space,
    check_nodejs,
    check_package_manager,
    meets_minimum_version,
    parse_node_version,
    print_results,
    run_all_checks,
)

MB = 1024 * 1024


# ---------------------------------------------------------------------------
# Version parsing
# ---------------------------------------------------------------------------


class TestVersions:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        "raw, expected",
        [("v20.19.0", (20, 19, 0)), ("22.1.3", (22, 1, 3)), ("v24.0.0-nightly\n", (24, 0, 0))],
    )
    def test_parse(self, raw, expected):
        assert parse_node_version(raw) == expected

    @pytest.mark.unit
    @pytest.mark.parametrize("raw", ["", "v20", "node 20.1.0", "vX.Y.Z"])
    def test_parse_invalid(self, raw):
        with pytest.raises(ValueError, match="invalid version format"):
            parse_node_version(raw)

    @pytest.mark.unit
    def test_minimum(self):
        assert meets_minimum_version((20, 19, 0)) is True
        assert meets_minimum_version((21, 0, 0)) is True
        assert meets_minimum_version((20, 18, 9)) is False
        assert meets_minimum_version((18, 20, 0)) is False


class TestPreflightResults:
    @pytest.mark.unit
    def test_soft_failure_is_not_fatal(self):
        results = PreflightResults([CheckResult("a", True), CheckResult("b", False)])
        assert results.all_passed is False
        assert results.fatal_error is False

    @pytest.mark.unit
    def test_fatal_failure(self):
        results = PreflightResults([CheckResult("a", False, fatal=True)])
        assert results.fatal_error is True

    @pytest.mark.unit
    def test_passed_fatal_check_is_fine(self):
        results = PreflightResults([CheckResult("a", True, fatal=True)])
        assert results.all_passed is True
        assert results.fatal_error is False


# ---------------------------------------------------------------------------
# Node.js / package manager
# ---------------------------------------------------------------------------


class TestCheckNodejs:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_missing(self, mock_runner):
        with patch("frontforge.preflight.shutil.which", return_value=None):
            result = await check_nodejs(mock_runner)
        assert result.passed is False
        assert result.fatal is True
        assert result.message == "Node.js not found"
        mock_runner.probe_version.assert_not_awaited()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_supported_version(self, mock_runner):
        mock_runner.probe_version.return_value = "v22.3.0"
        with patch("frontforge.preflight.shutil.which", return_value="/usr/bin/node"):
            result = await check_nodejs(mock_runner)
        assert result.passed is True
        assert result.message == "Node.js v22.3.0"
        mock_runner.probe_version.assert_awaited_once_with("/usr/bin/node", "--version")

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_too_old(self, mock_runner):
        mock_runner.probe_version.return_value = "v18.17.1"
        with patch("frontforge.preflight.shutil.which", return_value="/usr/bin/node"):
            result = await check_nodejs(mock_runner)
        assert result.passed is False
        assert "requires v20.19.0+" in result.message

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_probe_failure(self, mock_runner):
        mock_runner.probe_version.return_value = None
        with patch("frontforge.preflight.shutil.which", return_value="/usr/bin/node"):
            result = await check_nodejs(mock_runner)
        assert result.passed is False
        assert result.message == "Failed to check Node.js version"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_garbage_version(self, mock_runner):
        mock_runner.probe_version.return_value = "not-a-version"
        with patch("frontforge.preflight.shutil.which", return_value="/usr/bin/node"):
            result = await check_nodejs(mock_runner)
        assert result.passed is False
        assert result.message.startswith("Invalid Node.js version format")


class TestCheckPackageManager:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_found(self, mock_runner):
        mock_runner.probe_version.return_value = "9.12.0"
        with patch("frontforge.preflight.shutil.which", return_value="/usr/bin/pnpm"):
            result = await check_package_manager("pnpm", mock_runner)
        assert result.passed is True
        assert result.name == "Package Manager (pnpm)"
        assert result.message == "pnpm v9.12.0"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_missing_has_install_hint(self, mock_runner):
        with patch("frontforge.preflight.shutil.which", return_value=None):
            result = await check_package_manager("bun", mock_runner)
        assert result.passed is False
        assert result.fatal is True
        assert "bun.sh" in result.suggestion

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_unknown(self, mock_runner):
        result = await check_package_manager("pip", mock_runner)
        assert result.passed is False
        assert result.message == "Unknown package manager: pip"


# ---------------------------------------------------------------------------
# Filesystem checks
# ---------------------------------------------------------------------------


class TestCheckDirectoryConflicts:
    @pytest.mark.unit
    def test_new_directory(self, project_dir):
        result = check_directory_conflicts(project_dir)
        assert result.passed is True
        assert result.message == "Target: my-app (new directory)"

    @pytest.mark.unit
    def test_empty_directory(self, existing_project_dir):
        result = check_directory_conflicts(existing_project_dir)
        assert result.passed is True
        assert "(empty directory)" in result.message

    @pytest.mark.unit
    def test_populated_directory_is_soft_failure(self, existing_project_dir):
        (existing_project_dir / "a.txt").write_text("a", encoding="utf-8")
        (existing_project_dir / "b").mkdir()
        result = check_directory_conflicts(existing_project_dir)
        assert result.passed is False
        assert result.fatal is False
        assert result.message == "Directory already exists with 2 file(s)"

    @pytest.mark.unit
    def test_file_in_the_way(self, tmp_path):
        target = tmp_path / "taken"
        target.write_text("x", encoding="utf-8")
        result = check_directory_conflicts(target)
        assert result.passed is False
        assert result.fatal is True

    @pytest.mark.unit
    def test_system_directory(self):
        result = check_directory_conflicts("/etc/my-app")
        assert result.fatal is True
        assert "system directory" in result.message

    @pytest.mark.unit
    def test_empty_path(self):
        result = check_directory_conflicts("")
        assert result.fatal is True
        assert result.message == "Project path not specified"


class TestCheckDiskSpace:
    @pytest.mark.unit
    def test_plenty(self, project_dir):
        with patch("frontforge.preflight.shutil.disk_usage", return_value=SimpleNamespace(free=4096 * MB)) as usage:
            result = check_disk_space(project_dir)
        assert result.passed is True
        assert result.message == "Disk space: 4.0 GB available"
        usage.assert_called_once_with(project_dir.parent)

    @pytest.mark.unit
    def test_limited(self, project_dir):
        with patch("frontforge.preflight.shutil.disk_usage", return_value=SimpleNamespace(free=700 * MB)):
            result = check_disk_space(project_dir)
        assert result.passed is True
        assert result.message.startswith("Limited disk space: 700.0 MB")

    @pytest.mark.unit
    def test_insufficient_is_fatal(self, project_dir):
        with patch("frontforge.preflight.shutil.disk_usage", return_value=SimpleNamespace(free=100 * MB)):
            result = check_disk_space(project_dir, min_space_mb=500)
        assert result.passed is False
        assert result.fatal is True
        assert "requires 500 MB" in result.message

    @pytest.mark.unit
    def test_unmeasurable_is_soft(self, project_dir):
        with patch("frontforge.preflight.shutil.disk_usage", side_effect=PermissionError("denied")):
            result = check_disk_space(project_dir)
        assert result.passed is False
        assert result.fatal is False


# ---------------------------------------------------------------------------
# Aggregate
# ---------------------------------------------------------------------------


class TestRunAllChecks:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_runs_every_check_in_order(self, quick_config, mock_runner):
        mock_runner.probe_version.return_value = "v22.0.0"
        with patch("frontforge.preflight.shutil.which", side_effect=lambda name: f"/usr/bin/{name}"), \
             patch("frontforge.preflight.shutil.disk_usage", return_value=SimpleNamespace(free=8192 * MB)):
            results = await run_all_checks(quick_config, runner=mock_runner)

        assert [c.name for c in results.checks] == [
            "Node.js Installation",
            "Package Manager (npm)",
            "Directory Check",
            "Disk Space",
        ]
        assert results.all_passed is True

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_missing_node_is_fatal(self, quick_config, mock_runner):
        with patch("frontforge.preflight.shutil.which", return_value=None), \
             patch("frontforge.preflight.shutil.disk_usage", return_value=SimpleNamespace(free=8192 * MB)):
            results = await run_all_checks(quick_config, runner=mock_runner)
        assert results.fatal_error is True


class TestPrintResults:
    @pytest.mark.unit
    def test_suggestions_printed_for_failures(self):
        results = PreflightResults([
            CheckResult("Node.js Installation", True, "Node.js v22.0.0"),
            CheckResult("Disk Space", False, "Cannot check disk space", "Verify path permissions"),
        ])
        with patch("frontforge.preflight.console") as mock_console:
            print_results(results)
        printed = "\n".join(str(c.args[0]) for c in mock_console.print.call_args_list if c.args)
        assert "Node.js v22.0.0" in printed
        assert "Verify path permissions" in printed
