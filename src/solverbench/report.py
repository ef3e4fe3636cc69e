"""Build report written next to the executable, as JSON and canonical CBOR."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import cbor2

from solverbench.errors import FilesystemError
from solverbench.models import BuildResult, CompilerFlags

REPORT_JSON = "build-report.json"
REPORT_CBOR = "build-report.cbor"


@dataclass(frozen=True, slots=True)
class BuildReport:
    variant: str
    source: str
    link_flags: tuple[str, ...]
    compiler_flags: tuple[str, ...]
    command: tuple[str, ...]
    executable: str
    executable_sha256: str
    schema_version: int = 1

    @classmethod
    def from_result(cls, result: BuildResult, compiler_flags: CompilerFlags) -> BuildReport:
        return cls(
            variant=result.variant.name,
            source=str(result.variant.source_path),
            link_flags=result.variant.link_flags,
            compiler_flags=tuple(compiler_flags),
            command=result.command,
            executable=str(result.target.executable_path),
            executable_sha256=result.executable_sha256,
        )

    def to_json(self, path: str | Path | None = None) -> str:
        encoded = json.dumps(self._payload(), indent=2, sort_keys=True) + "\n"
        if path is not None:
            Path(path).write_text(encoded, encoding="utf-8")
        return encoded

    def to_cbor(self, path: str | Path | None = None) -> bytes:
        encoded = cbor2.dumps(self._payload(), canonical=True)
        if path is not None:
            Path(path).write_bytes(encoded)
        return encoded

    @classmethod
    def from_cbor(cls, raw: bytes) -> BuildReport:
        payload = cbor2.loads(raw)
        return cls(
            variant=payload["variant"],
            source=payload["source"],
            link_flags=tuple(payload["link_flags"]),
            compiler_flags=tuple(payload["compiler_flags"]),
            command=tuple(payload["command"]),
            executable=payload["executable"],
            executable_sha256=payload["executable_sha256"],
            schema_version=payload["schema_version"],
        )

    def _payload(self) -> dict[str, Any]:
        return {
            "schema_version": self.schema_version,
            "variant": self.variant,
            "source": self.source,
            "link_flags": list(self.link_flags),
            "compiler_flags": list(self.compiler_flags),
            "command": list(self.command),
            "executable": self.executable,
            "executable_sha256": self.executable_sha256,
        }


def report_paths(output_dir: Path) -> tuple[Path, Path]:
    return output_dir / REPORT_JSON, output_dir / REPORT_CBOR


def write_report(report: BuildReport, output_dir: Path) -> Path:
    json_path, cbor_path = report_paths(output_dir)
    for path, write in ((json_path, report.to_json), (cbor_path, report.to_cbor)):
        try:
            write(path)
        except OSError as exc:
            raise FilesystemError(
                "Build report could not be written.",
                hint="Check permissions and that no directory occupies the report path.",
                context={"operation": "write_report", "path": str(path), "error": str(exc)},
            ) from exc
    return json_path
