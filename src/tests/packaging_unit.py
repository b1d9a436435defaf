# src/tests/packaging_unit.py
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]


def test_only_src_is_installed():
    tomllib = pytest.importorskip("tomllib")
    cfg = tomllib.loads((ROOT / "pyproject.toml").read_text(encoding="utf-8"))
    find = cfg["tool"]["setuptools"]["packages"]["find"]
    assert find["include"] == ["src*"]
    assert not any(p.startswith("experiments") for p in find["include"])


def main():
    test_only_src_is_installed()
    print("✓ packaging checks passed")


if __name__ == "__main__":
    main()
