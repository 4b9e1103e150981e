import tomllib
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]


def _pyproject() -> dict:
    return tomllib.loads((ROOT / "pyproject.toml").read_text(encoding="utf-8"))


def test_console_script_points_at_main() -> None:
    scripts = _pyproject()["project"]["scripts"]
    assert scripts["safety-dashboard"] == "safety_dashboard.main:main"


def test_stylesheet_ships_with_package() -> None:
    package_data = _pyproject()["tool"]["setuptools"]["package-data"]
    assert "resources/*.css" in package_data["safety_dashboard.ui_gtk"]
    css = ROOT / "src" / "safety_dashboard" / "ui_gtk" / "resources" / "app.css"
    assert ".dashboard-grid" in css.read_text(encoding="utf-8")
