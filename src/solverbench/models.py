"""Core typed dataclasses for variants, build targets, and build outcomes."""

from __future__ import annotations

import shlex
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

DEFAULT_COMPILER_FLAGS = ("-DSTANDALONE", "-O3")
DEFAULT_BINARY_NAME = "solver"
DEFAULT_OUTPUT_DIR = Path("output")


@dataclass(frozen=True, slots=True)
class Variant:
    """One solver implementation: its source file and the libraries it links."""

    name: str
    source_path: Path
    link_flags: tuple[str, ...] = ()

    def linker_args(self) -> tuple[str, ...]:
        return tuple(f"-l{lib}" for lib in self.link_flags)


@dataclass(frozen=True, slots=True)
class CompilerFlags:
    """Build-wide flags applied to every variant."""

    flags: tuple[str, ...] = DEFAULT_COMPILER_FLAGS

    def __iter__(self) -> Iterator[str]:
        return iter(self.flags)

    @classmethod
    def parse(cls, raw: str | None) -> CompilerFlags:
        if raw is None or not raw.strip():
            return cls()
        return cls(flags=tuple(shlex.split(raw)))


@dataclass(frozen=True, slots=True)
class BuildTarget:
    object_paths: tuple[Path, ...]
    executable_path: Path
    source_paths: tuple[Path, ...] = ()

    @property
    def output_dir(self) -> Path:
        return self.executable_path.parent

    def removable_paths(self) -> tuple[Path, ...]:
        # Object paths that fell through suffix substitution name the source itself.
        sources = set(self.source_paths)
        objects = tuple(path for path in self.object_paths if path not in sources)
        return (*objects, self.executable_path)


@dataclass(frozen=True, slots=True)
class ToolchainResult:
    command: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def diagnostics(self) -> str:
        return "\n".join(stream for stream in (self.stdout, self.stderr) if stream)


@dataclass(frozen=True, slots=True)
class BuildResult:
    """Outcome of a successful build; failures raise ``ToolchainError`` instead."""

    variant: Variant
    target: BuildTarget
    command: tuple[str, ...]
    executable_sha256: str
    diagnostics: str = ""
    report_path: Path | None = None
