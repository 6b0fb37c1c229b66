from __future__ import annotations

import runpy
from pathlib import Path

import tradier_formula.__main__ as formula_main


def test_main_defaults_to_install(monkeypatch) -> None:
    calls: list[list[str]] = []
    monkeypatch.setattr(formula_main, "_cli_main", lambda argv=None: calls.append(list(argv or [])) or 0)

    rc = formula_main.main([])
    assert rc == 0
    assert calls == [["install"]]


def test_main_passes_through_args(monkeypatch) -> None:
    calls: list[list[str]] = []
    monkeypatch.setattr(formula_main, "_cli_main", lambda argv=None: calls.append(list(argv or [])) or 0)

    rc = formula_main.main(["resolve", "--os", "linux"])
    assert rc == 0
    assert calls == [["resolve", "--os", "linux"]]


def test_main_module_runpath_without_package_context() -> None:
    main_path = (
        Path(__file__).resolve().parents[1]
        / "installers"
        / "formula"
        / "tradier_formula"
        / "__main__.py"
    )
    result = runpy.run_path(str(main_path))
    assert "main" in result
