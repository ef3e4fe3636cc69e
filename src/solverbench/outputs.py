"""Output directory management and best-effort artifact removal."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from solverbench.errors import FilesystemError


def ensure_output_dir(path: str | Path) -> Path:
    """Create *path* and its parents if missing; existing contents are left alone."""
    directory = Path(path)
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FilesystemError(
            "Output directory could not be created.",
            hint="Check permissions and that no file occupies the output path.",
            context={"operation": "ensure_output_dir", "path": str(directory), "error": str(exc)},
        ) from exc
    return directory


def remove_files(paths: Iterable[Path]) -> tuple[Path, ...]:
    """Delete each path; a missing file counts as already removed."""
    removed: list[Path] = []
    for path in paths:
        try:
            path.unlink()
        except FileNotFoundError:
            continue
        except OSError as exc:
            raise FilesystemError(
                "Build artifact could not be removed.",
                hint="Check permissions on the output directory.",
                context={"operation": "clean", "path": str(path), "error": str(exc)},
            ) from exc
        removed.append(path)
    return tuple(removed)
