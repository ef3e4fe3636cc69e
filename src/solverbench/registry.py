"""Variant registry: explicit name -> (source, link libraries) lookup table."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from solverbench.errors import ConfigurationError, UnknownVariantError
from solverbench.models import Variant

DEFAULT_VARIANT = "flint"


@dataclass(frozen=True, slots=True)
class VariantRegistry:
    """Static, read-only set of solver variants for one build invocation."""

    variants: Mapping[str, Variant] = field(default_factory=dict)
    default: str | None = None

    def __post_init__(self) -> None:
        for key, variant in self.variants.items():
            if key != variant.name:
                raise ConfigurationError(
                    "Registry key does not match variant name.",
                    context={"key": key, "variant": variant.name},
                )
        if self.default is not None and self.default not in self.variants:
            raise ConfigurationError(
                "Registry default names an unregistered variant.",
                hint="Register the default variant or drop the `default` entry.",
                context={"default": self.default},
            )

    @classmethod
    def of(cls, variants: Iterable[Variant], *, default: str | None = None) -> VariantRegistry:
        table: dict[str, Variant] = {}
        for variant in variants:
            if variant.name in table:
                raise ConfigurationError(
                    "Duplicate variant name in registry.",
                    context={"variant": variant.name},
                )
            table[variant.name] = variant
        return cls(variants=table, default=default)

    def names(self) -> tuple[str, ...]:
        return tuple(sorted(self.variants))

    def resolve(self, name: str | None = None) -> Variant:
        """Return the variant registered as *name*.

        ``None`` selects the registry's explicit default and a blank name raises
        ``ConfigurationError``. Any other unregistered name raises
        ``UnknownVariantError``.
        """
        if name is None:
            if self.default is None:
                raise ConfigurationError(
                    "No variant selected and the registry declares no default.",
                    hint="Pass --impl or set SOLVERBENCH_IMPL.",
                )
            name = self.default
        if not name.strip():
            raise ConfigurationError(
                "Variant selector is empty.",
                hint="Pass a registered variant name or omit --impl to use the default.",
            )
        try:
            return self.variants[name]
        except KeyError:
            raise UnknownVariantError(name, known=self.names()) from None


def default_registry(root: str | Path = ".") -> VariantRegistry:
    """Built-in registry; solver sources sit one level above the benchmark directory."""
    return VariantRegistry.of(
        [
            Variant(
                name="flint",
                source_path=Path(root) / ".." / "solver_flint.cpp",
                link_flags=("flint", "gmp"),
            ),
        ],
        default=DEFAULT_VARIANT,
    )


def parse_registry(raw: str, *, base_dir: Path | None = None) -> VariantRegistry:
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigurationError("Invalid registry JSON.", hint=str(exc)) from exc

    if not isinstance(payload, dict):
        raise ConfigurationError("Invalid registry payload type.")

    variants_raw = payload.get("variants")
    if not isinstance(variants_raw, dict) or not variants_raw:
        raise ConfigurationError(
            "Registry `variants` must be a non-empty object.",
            hint='Use {"variants": {"flint": {"source": "...", "link": ["flint"]}}}.',
        )
    variants = [
        _parse_variant(name, item, base_dir=base_dir)
        for name, item in sorted(variants_raw.items())
    ]
    default = payload.get("default")
    if default is not None and not isinstance(default, str):
        raise ConfigurationError("Invalid registry `default` value.")
    return VariantRegistry.of(variants, default=default)


def read_registry(path: str | Path) -> VariantRegistry:
    registry_path = Path(path)
    try:
        raw = registry_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ConfigurationError(
            "Registry file does not exist.",
            hint="Check the --registry path.",
            context={"path": str(registry_path)},
        ) from exc
    return parse_registry(raw, base_dir=registry_path.parent)


def _parse_variant(name: str, item: Any, *, base_dir: Path | None) -> Variant:
    if not isinstance(item, dict):
        raise ConfigurationError("Invalid variant entry in registry.", context={"variant": name})
    source = item.get("source")
    if not isinstance(source, str) or not source:
        raise ConfigurationError(
            "Variant entry is missing a `source` path.",
            context={"variant": name},
        )
    link = item.get("link", [])
    if not isinstance(link, list) or not all(isinstance(lib, str) and lib for lib in link):
        raise ConfigurationError(
            "Variant `link` must be a list of library names.",
            context={"variant": name},
        )
    source_path = Path(source)
    if base_dir is not None and not source_path.is_absolute():
        source_path = base_dir / source_path
    return Variant(name=name, source_path=source_path, link_flags=tuple(link))
