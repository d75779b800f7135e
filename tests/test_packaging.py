import os

import pytest

tomllib = pytest.importorskip("tomllib")

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def _project():
    with open(os.path.join(ROOT, "pyproject.toml"), "rb") as handle:
        return tomllib.load(handle)["project"]


def test_directly_imported_libraries_are_declared():
    names = {dep.split(">")[0].split("=")[0].strip() for dep in _project()["dependencies"]}
    assert {"fastmcp", "mcp", "httpx", "python-dotenv", "google-adk", "google-genai", "litellm"} <= names


def test_no_readme_declared():
    assert "readme" not in _project()
