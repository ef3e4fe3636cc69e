"""Linear build pipeline: resolve variant, derive paths, ensure output, compile+link."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path

from solverbench.config import BuildConfig
from solverbench.errors import ConfigurationError, SolverBenchError
from solverbench.invoker import BuildInvoker
from solverbench.models import BuildResult, BuildTarget, Variant
from solverbench.observability import StructuredLogger
from solverbench.outputs import ensure_output_dir, remove_files
from solverbench.paths import executable_path_for, object_path_for, resolve_target
from solverbench.registry import VariantRegistry, default_registry, read_registry
from solverbench.report import BuildReport, report_paths, write_report
from solverbench.toolchain import SubprocessToolchain


@dataclass(slots=True)
class BenchmarkBuild:
    """Builds the benchmark executable for one selected solver variant.

    A single output root holds one executable at a time; building different
    variants concurrently needs a distinct ``output_dir`` per variant.
    """

    config: BuildConfig = field(default_factory=BuildConfig)
    registry: VariantRegistry | None = None
    invoker: BuildInvoker | None = None
    logger: StructuredLogger = field(default_factory=StructuredLogger)
    _registry: VariantRegistry = field(init=False, repr=False)
    _invoker: BuildInvoker = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.registry is not None:
            self._registry = self.registry
        elif self.config.registry_path is not None:
            self._registry = read_registry(self.config.registry_path)
        else:
            self._registry = default_registry()
        self._invoker = self.invoker or BuildInvoker(
            toolchain=SubprocessToolchain(tool=self.config.cxx),
        )

    @property
    def variants(self) -> VariantRegistry:
        return self._registry

    def resolve(self, name: str | None = None) -> Variant:
        selector = self.config.variant if name is None else name
        variant = self._registry.resolve(selector)
        self.logger.log(
            operation="resolve_variant",
            variant=variant.name,
            phase="resolve",
            message="Resolved solver variant.",
            extra={
                "source": str(variant.source_path),
                "link_flags": list(variant.link_flags),
            },
        )
        return variant

    def target_for(self, variant: Variant) -> BuildTarget:
        return resolve_target(variant, self.config.output_dir, self.config.binary_name)

    def build(self, name: str | None = None) -> BuildResult:
        variant = self.resolve(name)
        target = self.target_for(variant)
        try:
            if not variant.source_path.is_file():
                raise ConfigurationError(
                    "Variant source file does not exist.",
                    hint="Check the registry entry's source path.",
                    context={"variant": variant.name, "source": str(variant.source_path)},
                )
            ensure_output_dir(target.output_dir)
            self.logger.log(
                operation="ensure_output_dir",
                variant=variant.name,
                phase="prepare",
                message="Output directory ready.",
                extra={"path": str(target.output_dir)},
            )
            self.logger.log(
                operation="toolchain_invoke",
                variant=variant.name,
                phase="build",
                message="Invoking toolchain.",
                extra={"compiler_flags": list(self.config.compiler_flags)},
            )
            built = self._invoker.build(variant, self.config.compiler_flags, target)
            report = BuildReport.from_result(built, self.config.compiler_flags)
            result = replace(built, report_path=write_report(report, target.output_dir))
        except SolverBenchError as exc:
            self.logger.log(
                operation="build_failed",
                variant=variant.name,
                phase="build",
                message=exc.args[0] if exc.args else exc.code,
                level="error",
                extra={"code": exc.code},
            )
            raise

        self.logger.log(
            operation="build_complete",
            variant=variant.name,
            phase="build",
            message="Built benchmark executable.",
            extra={
                "executable": str(target.executable_path),
                "sha256": result.executable_sha256,
            },
        )
        return result

    def clean_target(self) -> BuildTarget:
        """Artifacts any registered variant could have left in the output root."""
        sources = tuple(
            self._registry.variants[name].source_path for name in self._registry.names()
        )
        return BuildTarget(
            object_paths=tuple(object_path_for(source) for source in sources),
            executable_path=executable_path_for(self.config.output_dir, self.config.binary_name),
            source_paths=sources,
        )

    def clean(self) -> tuple[Path, ...]:
        target = self.clean_target()
        removed = self._invoker.clean(target)
        removed += remove_files(report_paths(self.config.output_dir))
        self.logger.log(
            operation="clean",
            variant=None,
            phase="clean",
            message="Removed build artifacts.",
            extra={"removed": [str(path) for path in removed]},
        )
        return removed
