"""Filesystem helpers."""

from pathlib import Path


def ensure_dir(path: Path) -> Path:
    """Ensure a directory exists, creating it if necessary."""
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_path() -> Path:
    """Get the hostbridge data directory (~/.hostbridge)."""
    return ensure_dir(Path.home() / ".hostbridge")


def get_logs_path() -> Path:
    return ensure_dir(get_data_path() / "logs")
