"""Typed build error model with stable, machine-readable error codes."""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum


class ErrorCode(StrEnum):
    """Stable error identifiers reported by the CLI and build reports."""

    UNKNOWN_VARIANT = "E_UNKNOWN_VARIANT"
    CONFIGURATION = "E_CONFIGURATION"
    FILESYSTEM = "E_FILESYSTEM"
    TOOLCHAIN = "E_TOOLCHAIN"


class SolverBenchError(Exception):
    """Base error class that carries code, optional hint, and context."""

    code: str
    hint: str | None
    context: Mapping[str, str]

    def __init__(
        self,
        message: str,
        *,
        code: ErrorCode,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code.value
        self.hint = hint
        self.context = dict(context or {})

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.hint:
            parts.append(f"Hint: {self.hint}")
        if self.context:
            for k, v in self.context.items():
                if v:
                    parts.append(f"  {k}: {v}")
        return "\n".join(parts)

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "code": self.code,
            "message": str(self),
            "context": dict(self.context),
        }
        if self.hint is not None:
            payload["hint"] = self.hint
        return payload


class UnknownVariantError(SolverBenchError):
    def __init__(
        self,
        name: str,
        *,
        known: tuple[str, ...] = (),
        hint: str | None = None,
    ) -> None:
        super().__init__(
            f"Unknown solver variant {name!r}.",
            code=ErrorCode.UNKNOWN_VARIANT,
            hint=hint or "Select one of the registered variants.",
            context={"variant": name, "known": ", ".join(known)},
        )
        self.name = name
        self.known = known


class ConfigurationError(SolverBenchError):
    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message, code=ErrorCode.CONFIGURATION, hint=hint, context=context)


class FilesystemError(SolverBenchError):
    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message, code=ErrorCode.FILESYSTEM, hint=hint, context=context)


class ToolchainError(SolverBenchError):
    """Nonzero compiler/linker exit; ``diagnostics`` holds its output verbatim."""

    def __init__(
        self,
        message: str,
        *,
        diagnostics: str = "",
        returncode: int | None = None,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        merged = dict(context or {})
        if returncode is not None:
            merged.setdefault("returncode", str(returncode))
        merged.setdefault("diagnostics", diagnostics)
        super().__init__(message, code=ErrorCode.TOOLCHAIN, hint=hint, context=merged)
        self.diagnostics = diagnostics
        self.returncode = returncode


__all__ = [
    "ConfigurationError",
    "ErrorCode",
    "FilesystemError",
    "SolverBenchError",
    "ToolchainError",
    "UnknownVariantError",
]
