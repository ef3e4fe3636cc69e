"""Build invocation: compile+link one variant, and clean its artifacts."""

from __future__ import annotations

import hashlib
import os
import uuid
from dataclasses import dataclass, field
from pathlib import Path

from solverbench.errors import FilesystemError, ToolchainError
from solverbench.models import BuildResult, BuildTarget, CompilerFlags, Variant
from solverbench.outputs import remove_files
from solverbench.toolchain import SubprocessToolchain, Toolchain


@dataclass(slots=True)
class BuildInvoker:
    toolchain: Toolchain = field(default_factory=SubprocessToolchain)

    def build(
        self,
        variant: Variant,
        compiler_flags: CompilerFlags,
        target: BuildTarget,
    ) -> BuildResult:
        """Produce ``target.executable_path`` or leave the previous executable untouched.

        The toolchain links into a temporary sibling which is renamed over the
        executable only after a zero exit status.
        """
        staging = _staging_path(target.executable_path)
        try:
            result = self.toolchain.compile_and_link(
                tuple(compiler_flags),
                (variant.source_path,),
                variant.linker_args(),
                staging,
            )
            if not result.ok:
                raise ToolchainError(
                    f"Build of variant {variant.name!r} failed.",
                    diagnostics=result.diagnostics,
                    returncode=result.returncode,
                    hint="Check the compiler output and the variant's link libraries.",
                    context={
                        "toolchain": self.toolchain.name,
                        "variant": variant.name,
                        "command": " ".join(result.command),
                    },
                )
            if not staging.is_file():
                raise ToolchainError(
                    "Toolchain reported success but produced no executable.",
                    diagnostics=result.diagnostics,
                    returncode=result.returncode,
                    context={
                        "toolchain": self.toolchain.name,
                        "variant": variant.name,
                        "output": str(staging),
                    },
                )
            try:
                os.replace(staging, target.executable_path)
            except OSError as exc:
                raise FilesystemError(
                    "Executable could not be moved into place.",
                    context={
                        "operation": "build",
                        "path": str(target.executable_path),
                        "error": str(exc),
                    },
                ) from exc
        finally:
            staging.unlink(missing_ok=True)

        return BuildResult(
            variant=variant,
            target=target,
            command=result.command,
            executable_sha256=_sha256(target.executable_path),
            diagnostics=result.diagnostics,
        )

    def clean(self, target: BuildTarget) -> tuple[Path, ...]:
        return remove_files(target.removable_paths())


def _staging_path(executable_path: Path) -> Path:
    return executable_path.with_name(f".{executable_path.name}.{uuid.uuid4().hex}.tmp")


def _sha256(path: Path) -> str:
    digest = hashlib.sha256()
    with path.open("rb") as handle:
        for chunk in iter(lambda: handle.read(1 << 16), b""):
            digest.update(chunk)
    return digest.hexdigest()
