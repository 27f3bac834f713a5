"""Top-level package for the PDF toolkit.

Provides subpackages:
- pdf_toolkit.units – ordered, lifecycle-managed image units
- pdf_toolkit.layout – page geometry, image fitting, text pagination
- pdf_toolkit.splitting – page range extraction and per-page splitting
- pdf_toolkit.output – PDF and DOCX encoders
- pdf_toolkit.controller – job orchestration with save/notify collaborators
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            content = pyproject.read_text()
            for line in content.splitlines():
                if line.strip().startswith("version"):
                    # Parse: version = "0.3.0"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass

    try:
        from importlib.metadata import PackageNotFoundError, version as pkg_version
        return pkg_version("pdf_toolkit")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
