"""Pure path derivation for build artifacts."""

from __future__ import annotations

from pathlib import Path

from solverbench.models import DEFAULT_BINARY_NAME, BuildTarget, Variant

SOURCE_SUFFIXES = (".c", ".cc", ".cpp", ".cxx", ".C")
OBJECT_SUFFIX = ".o"


def object_path_for(source_path: str | Path) -> Path:
    """Swap a recognized source suffix for ``.o``; any other path passes through unchanged."""
    path = Path(source_path)
    if path.suffix in SOURCE_SUFFIXES:
        return path.with_suffix(OBJECT_SUFFIX)
    return path


def executable_path_for(output_root: str | Path, binary_name: str = DEFAULT_BINARY_NAME) -> Path:
    return Path(output_root) / binary_name


def resolve_target(
    variant: Variant,
    output_root: str | Path,
    binary_name: str = DEFAULT_BINARY_NAME,
) -> BuildTarget:
    sources = (variant.source_path,)
    return BuildTarget(
        object_paths=tuple(object_path_for(source) for source in sources),
        executable_path=executable_path_for(output_root, binary_name),
        source_paths=sources,
    )
