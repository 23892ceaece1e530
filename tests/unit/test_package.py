"""Unit tests for the package namespace and the modules documented in docs/."""

import importlib
import re
from pathlib import Path

import pytest

import diffl

DOCS = Path(__file__).parents[2] / "docs"


def _documented_modules():
    text = (DOCS / "index.rst").read_text()
    return re.findall(r"^\.\. automodule:: (\S+)$", text, flags=re.MULTILINE)


def test_docs_cover_mathematics():
    modules = _documented_modules()
    assert "diffl.mathematics.derivatives" in modules
    assert "diffl.mathematics.operators" in modules


@pytest.mark.parametrize("name", _documented_modules())
def test_documented_module_exports(name):
    module = importlib.import_module(name)
    assert module.__doc__
    for attr in module.__all__:
        assert getattr(diffl, attr) is getattr(module, attr)


def test_namespace_without_helpers():
    # Only the names listed in __all__ are star-imported into the package
    for name in ["np", "logging", "spla", "skimage", "logger", "tomllib"]:
        assert not hasattr(diffl, name)
    for name in ["diffl", "diffl_into", "diffl_adj", "diffl_adj_into", "diffl_map"]:
        assert callable(getattr(diffl, name))
