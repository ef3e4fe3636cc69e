"""Public package entrypoint for the solver benchmark build orchestrator."""

from .config import BuildConfig
from .errors import (
    ConfigurationError,
    ErrorCode,
    FilesystemError,
    SolverBenchError,
    ToolchainError,
    UnknownVariantError,
)
from .invoker import BuildInvoker
from .models import BuildResult, BuildTarget, CompilerFlags, ToolchainResult, Variant
from .outputs import ensure_output_dir
from .paths import executable_path_for, object_path_for, resolve_target
from .pipeline import BenchmarkBuild
from .registry import VariantRegistry, default_registry, read_registry
from .toolchain import SubprocessToolchain, Toolchain

__all__ = [
    "BenchmarkBuild",
    "BuildConfig",
    "BuildInvoker",
    "BuildResult",
    "BuildTarget",
    "CompilerFlags",
    "ConfigurationError",
    "ErrorCode",
    "FilesystemError",
    "SolverBenchError",
    "SubprocessToolchain",
    "Toolchain",
    "ToolchainError",
    "ToolchainResult",
    "UnknownVariantError",
    "Variant",
    "VariantRegistry",
    "default_registry",
    "ensure_output_dir",
    "executable_path_for",
    "object_path_for",
    "read_registry",
    "resolve_target",
]
