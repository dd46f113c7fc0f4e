from __future__ import annotations

import ast
from pathlib import Path


ROOT = Path(__file__).resolve().parents[1]


def _python_files(root: Path):
    for path in root.rglob("*.py"):
        if "dist" in path.parts:
            continue
        yield path


def _imports(path: Path):
    tree = ast.parse(path.read_text(encoding="utf-8", errors="ignore"))
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                yield alias.name
        elif isinstance(node, ast.ImportFrom):
            yield node.module or ""


def _matches(name: str, package: str) -> bool:
    return name == package or name.startswith(f"{package}.")


def test_core_layer_does_not_import_infra_layer():
    violations: list[tuple[str, str]] = []
    for path in _python_files(ROOT / "core"):
        for name in _imports(path):
            if _matches(name, "infra"):
                violations.append((str(path.relative_to(ROOT)), name))
    assert not violations, f"Core layer imports infra layer: {violations}"


def test_openai_sdk_confined_to_advice_provider():
    allowed = ROOT / "core" / "services" / "advisory" / "openai_provider.py"
    violations = [
        str(path.relative_to(ROOT))
        for path in _python_files(ROOT / "core")
        if path != allowed and any(_matches(name, "openai") for name in _imports(path))
    ]
    assert not violations, f"OpenAI SDK imported outside its provider: {violations}"


def test_forecasting_calculations_do_not_touch_persistence():
    forecasting = ROOT / "core" / "services" / "forecasting"
    violations = [
        (str(path.relative_to(ROOT)), name)
        for path in _python_files(forecasting)
        for name in _imports(path)
        if _matches(name, "sqlalchemy")
    ]
    assert not violations, f"Forecasting imports persistence libraries: {violations}"
