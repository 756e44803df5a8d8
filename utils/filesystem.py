from pathlib import Path


def ensure_dir(path: Path | str) -> Path:
    """Create a directory and its parents; existing directories are left alone"""
    directory = Path(path)
    directory.mkdir(parents=True, exist_ok=True)
    return directory
