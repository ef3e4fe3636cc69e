"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from solverbench.models import ToolchainResult, Variant
from solverbench.registry import VariantRegistry


@dataclass(slots=True)
class RecordingToolchain:
    """Stands in for the compiler: records each call and writes a fake executable."""

    returncode: int = 0
    stderr: str = ""
    write_output: bool = True
    name: str = "fake"
    calls: list[dict[str, object]] = field(default_factory=list)

    def compile_and_link(
        self,
        flags: Sequence[str],
        sources: Sequence[Path],
        link_flags: Sequence[str],
        output: Path,
    ) -> ToolchainResult:
        self.calls.append(
            {
                "flags": tuple(flags),
                "sources": tuple(sources),
                "link_flags": tuple(link_flags),
                "output": output,
            },
        )
        if self.write_output:
            output.write_bytes(b"\x7fELF fake " + ",".join(link_flags).encode())
        return ToolchainResult(
            command=("fake-cxx", *flags, "-o", str(output), *map(str, sources), *link_flags),
            returncode=self.returncode,
            stderr=self.stderr,
        )


@pytest.fixture
def toolchain() -> RecordingToolchain:
    return RecordingToolchain()


@pytest.fixture
def flint_source(tmp_path: Path) -> Path:
    source = tmp_path / "solver_flint.src"
    source.write_text("int main() { return 0; }\n", encoding="utf-8")
    return source


@pytest.fixture
def registry(flint_source: Path) -> VariantRegistry:
    return VariantRegistry.of(
        [Variant(name="flint", source_path=flint_source, link_flags=("flint", "gmp"))],
        default="flint",
    )


@pytest.fixture
def make_toolchain() -> type[RecordingToolchain]:
    return RecordingToolchain
