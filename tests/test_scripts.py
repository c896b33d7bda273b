from __future__ import annotations

import importlib.util
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]


def test_sweep_script_puts_package_sources_on_path(monkeypatch):
    monkeypatch.setattr(sys, "path", [p for p in sys.path if Path(p or ".").resolve() != REPO_ROOT / "src" / "timeflow"])
    spec = importlib.util.spec_from_file_location("sweep_missed_shifts", REPO_ROOT / "scripts" / "sweep_missed_shifts.py")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    assert str(REPO_ROOT / "src" / "timeflow") in sys.path
    assert callable(module.main)
