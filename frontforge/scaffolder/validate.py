"""Post-generation sanity checks.

Validation is advisory: every finding is returned as a
:class:`ValidationResult` and the caller prints failures as warnings.
Nothing here raises for a bad project.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from frontforge.config import Config
from frontforge.scaffolder.configs import vite_config_name
from frontforge.scaffolder.templates import app_path, main_extension


@dataclass
class ValidationResult:
    check: str
    passed: bool
    message: str = ""


def core_files(config: Config) -> list[str]:
    """Project-relative files every generated project must contain."""
    return [
        "package.json",
        ".gitignore",
        "README.md",
        "eslint.config.js",
        "index.html",
        f"src/main.{main_extension(config)}",
        app_path(config),
    ]


def _validate_core_files(root: Path, config: Config) -> list[ValidationResult]:
    results: list[ValidationResult] = []
    for rel in core_files(config):
        check = f"File exists: {rel}"
        path = root / rel
        if not path.exists():
            results.append(ValidationResult(check, False, "file does not exist"))
        elif path.is_dir():
            results.append(ValidationResult(check, False, "expected file, found directory"))
        elif path.stat().st_size == 0:
            results.append(ValidationResult(check, False, "file is empty"))
        else:
            results.append(ValidationResult(check, True))
    return results


def _validate_package_json(root: Path) -> list[ValidationResult]:
    path = root / "package.json"
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        return [ValidationResult("package.json: readable", False, str(exc))]

    try:
        manifest = json.loads(raw)
    except json.JSONDecodeError as exc:
        return [ValidationResult("package.json: valid JSON", False, str(exc))]
    if not isinstance(manifest, dict):
        return [ValidationResult("package.json: valid JSON", False, "top-level value is not an object")]

    results = [ValidationResult("package.json: valid JSON", True)]
    for field in ("name", "scripts", "dependencies"):
        check = f"package.json: has '{field}' field"
        if field in manifest:
            results.append(ValidationResult(check, True))
        else:
            results.append(ValidationResult(check, False, f"missing required field: {field}"))

    scripts = manifest.get("scripts")
    if isinstance(scripts, dict):
        check = "package.json: has 'dev' script"
        if "dev" in scripts:
            results.append(ValidationResult(check, True))
        else:
            results.append(ValidationResult(check, False, "missing 'dev' script in package.json"))
    return results


def _validate_index_html(root: Path, config: Config) -> list[ValidationResult]:
    try:
        content = (root / "index.html").read_text(encoding="utf-8")
    except OSError as exc:
        return [ValidationResult("index.html: readable", False, str(exc))]

    ext = main_extension(config)
    expected = f"/src/main.{ext}"
    results: list[ValidationResult] = []
    if expected in content:
        results.append(ValidationResult("index.html: references main file", True))
    else:
        results.append(
            ValidationResult("index.html: references main file", False, f"does not reference {expected}")
        )

    if (root / "src" / f"main.{ext}").exists():
        results.append(ValidationResult("Main file exists", True))
    else:
        results.append(ValidationResult("Main file exists", False, f"main.{ext} does not exist"))
    return results


def _validate_vite_config(root: Path, config: Config) -> list[ValidationResult]:
    name = vite_config_name(config)
    if (root / name).exists():
        return [ValidationResult("vite.config exists", True)]
    return [ValidationResult("vite.config exists", False, f"{name} not found")]


def _validate_typescript_configs(root: Path) -> list[ValidationResult]:
    results: list[ValidationResult] = []
    for name in ("tsconfig.json", "tsconfig.app.json", "tsconfig.node.json"):
        check = f"TypeScript: {name} exists"
        if (root / name).exists():
            results.append(ValidationResult(check, True))
        else:
            results.append(ValidationResult(check, False, f"{name} not found"))
    return results


def validate_project(project_path: str | Path, config: Config) -> list[ValidationResult]:
    """Run every check against a generated project.

    Dry runs and meta-framework projects return an empty list: there is
    either nothing on disk yet or the layout belongs to an upstream tool.
    """
    if config.dry_run or config.is_meta:
        return []

    root = Path(project_path)
    results: list[ValidationResult] = []
    results += _validate_core_files(root, config)
    results += _validate_package_json(root)
    results += _validate_index_html(root, config)
    results += _validate_vite_config(root, config)
    if config.is_typescript:
        results += _validate_typescript_configs(root)
    return results


def failed(results: list[ValidationResult]) -> list[ValidationResult]:
    return [result for result in results if not result.passed]
