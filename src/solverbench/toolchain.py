"""Compiler/linker toolchain contract and the subprocess-backed default."""

from __future__ import annotations

import os
import shutil
import subprocess
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from solverbench.errors import ToolchainError
from solverbench.models import ToolchainResult


class Toolchain(Protocol):
    name: str

    def compile_and_link(
        self,
        flags: Sequence[str],
        sources: Sequence[Path],
        link_flags: Sequence[str],
        output: Path,
    ) -> ToolchainResult:
        """Compile *sources* and link them into *output*; never raise on a nonzero exit."""


@dataclass(slots=True)
class SubprocessToolchain:
    """Runs ``<cxx> <flags> -o <output> <sources> <link flags>`` as one step."""

    tool: str = "c++"
    name: str = "cxx"
    env: Mapping[str, str] = field(default_factory=dict)

    def command(
        self,
        flags: Sequence[str],
        sources: Sequence[Path],
        link_flags: Sequence[str],
        output: Path,
    ) -> tuple[str, ...]:
        return (
            self.tool,
            *flags,
            "-o",
            str(output),
            *(str(source) for source in sources),
            *link_flags,
        )

    def compile_and_link(
        self,
        flags: Sequence[str],
        sources: Sequence[Path],
        link_flags: Sequence[str],
        output: Path,
    ) -> ToolchainResult:
        command = self.command(flags, sources, link_flags, output)
        if shutil.which(self.tool) is None:
            raise ToolchainError(
                f"Compiler `{self.tool}` was not found in PATH.",
                hint="Install a C++ toolchain or point CXX at one.",
                context={"toolchain": self.name, "command": " ".join(command)},
            )

        env = dict(os.environ)
        env.update(self.env)
        result = subprocess.run(
            list(command),
            env=env,
            capture_output=True,
            text=True,
            check=False,
        )
        return ToolchainResult(
            command=command,
            returncode=result.returncode,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
        )
