"""Immutable per-invocation build configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path

from solverbench.models import (
    DEFAULT_BINARY_NAME,
    DEFAULT_OUTPUT_DIR,
    CompilerFlags,
)

ENV_VARIANT = "SOLVERBENCH_IMPL"
ENV_OUTPUT_DIR = "SOLVERBENCH_OUTPUT_DIR"
ENV_REGISTRY = "SOLVERBENCH_REGISTRY"
ENV_CXX = "CXX"
ENV_CPPFLAGS = "CPPFLAGS"


@dataclass(frozen=True, slots=True)
class BuildConfig:
    variant: str | None = None
    output_dir: Path = DEFAULT_OUTPUT_DIR
    binary_name: str = DEFAULT_BINARY_NAME
    compiler_flags: CompilerFlags = field(default_factory=CompilerFlags)
    cxx: str = "c++"
    registry_path: Path | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> BuildConfig:
        env = os.environ if environ is None else environ
        registry = env.get(ENV_REGISTRY)
        return cls(
            variant=env.get(ENV_VARIANT) or None,
            output_dir=Path(env.get(ENV_OUTPUT_DIR) or DEFAULT_OUTPUT_DIR),
            compiler_flags=CompilerFlags.parse(env.get(ENV_CPPFLAGS)),
            cxx=env.get(ENV_CXX) or "c++",
            registry_path=Path(registry) if registry else None,
        )

    def with_overrides(
        self,
        *,
        variant: str | None = None,
        output_dir: str | Path | None = None,
        cxx: str | None = None,
        registry_path: str | Path | None = None,
    ) -> BuildConfig:
        """Return a copy with every non-``None`` argument applied."""
        updated = self
        if variant is not None:
            updated = replace(updated, variant=variant)
        if output_dir is not None:
            updated = replace(updated, output_dir=Path(output_dir))
        if cxx is not None:
            updated = replace(updated, cxx=cxx)
        if registry_path is not None:
            updated = replace(updated, registry_path=Path(registry_path))
        return updated
