"""
Version helper for electricityMap services.
Reads the VERSION file written by the client build.
"""

from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent.parent.parent  # libs/em_common -> libs -> root


def read_version(root_dir: Path = ROOT_DIR) -> str:
    """
    Read version from root VERSION file.

    Returns:
        Version string (trimmed), "0.0.0" if the file is missing or unreadable
    """
    version_file = Path(root_dir) / "VERSION"
    try:
        return version_file.read_text(encoding="utf-8").strip() or "0.0.0"
    except OSError:
        return "0.0.0"
