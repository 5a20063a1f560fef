"""Tests for layering guardrails between transport, API, and aggregation code."""

import ast
from pathlib import Path

PACKAGE_DIR = Path(__file__).resolve().parents[1] / "src" / "pokedex"


def _imported_modules(path: Path):
    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                yield node.lineno, alias.name
        elif isinstance(node, ast.ImportFrom) and node.module:
            yield node.lineno, node.module


def _violations(files, forbidden):
    found = []
    for path in files:
        for lineno, module in _imported_modules(path):
            if any(module == name or module.startswith(f"{name}.") for name in forbidden):
                found.append(f"{path.relative_to(PACKAGE_DIR)}:{lineno} imports {module}")
    return found


def test_api_layer_has_no_transport_imports():
    """Test that the API layer never talks HTTP directly, in or out.

    Upstream access goes through UpstreamClient; inbound HTTP lives in server.py.
    """
    api_files = sorted((PACKAGE_DIR / "api").glob("*.py"))
    assert api_files, "api package not found"

    violations = _violations(api_files, ["requests", "fastapi", "starlette", "uvicorn"])

    assert not violations, "API layer has transport imports:\n" + "\n".join(violations)


def test_aggregation_only_reaches_upstream_through_client():
    """Test that aggregation and cache modules don't import requests."""
    files = sorted((PACKAGE_DIR / "aggregation").glob("*.py")) + sorted((PACKAGE_DIR / "cache").glob("*.py"))

    violations = _violations(files, ["requests", "fastapi"])

    assert not violations, "Aggregation layer bypasses UpstreamClient:\n" + "\n".join(violations)
