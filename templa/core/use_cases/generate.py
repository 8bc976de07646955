"""
Generate use case: run every trigger annotation in a set of packages.

Each annotation is generated independently: a failure is recorded
against that annotation and the rest of the run continues.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

from templa.core.config.loader import Settings
from templa.core.models.annotation import Annotation
from templa.core.models.declarations import Package
from templa.core.models.directive import WriteDirective
from templa.core.persistence.directive_writer import WriteReport, write_directives
from templa.core.services.generators.bindings import (
    any_type_generator,
    interface_generator,
    package_generator,
    struct_generator,
)
from templa.core.services.generators.dispatcher import SOURCE_KIND
from templa.core.services.generators.errors import GenerationError
from templa.core.services.generators.formatter import get_formatter

logger = logging.getLogger(__name__)


@dataclass
class AnnotationFailure:
    """One annotation that could not be generated."""

    package: str
    annotation: str
    target: str
    error: str


@dataclass
class GenerateResult:
    """Outcome of a generation run."""

    directives: list[WriteDirective] = field(default_factory=list)
    failures: list[AnnotationFailure] = field(default_factory=list)
    report: WriteReport = field(default_factory=WriteReport)

    @property
    def ok(self) -> bool:
        return not self.failures and self.report.ok

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        return {
            "ok": self.ok,
            "files": [
                {
                    "file_name": d.file_name,
                    "formatted": d.formatted,
                    "overwrite": d.overwrite,
                    "reason": d.reason,
                }
                for d in self.directives
            ],
            "failures": [
                {
                    "package": f.package,
                    "annotation": f.annotation,
                    "target": f.target,
                    "error": f.error,
                }
                for f in self.failures
            ],
            **self.report.to_dict(),
        }


def run_generation(
    packages: list[Package],
    settings: Settings,
    *,
    out_dir: Path | None = None,
    dry_run: bool = False,
) -> GenerateResult:
    """Generate and write files for every trigger annotation.

    Args:
        packages: Loaded packages.
        settings: Trigger names, formatter and file suffix.
        out_dir: Overrides ``settings.output_dir`` and the package dirs.
        dry_run: Generate but do not write.
    """
    result = GenerateResult()
    options: dict[str, Any] = {
        "formatter": get_formatter(settings.formatter),
        "file_suffix": settings.file_suffix,
    }
    triggers = {name.lower() for name in settings.annotations}
    claimed: set[Path] = set()

    for pkg in packages:
        to_dir = _output_dir(pkg, settings, out_dir)
        produced: list[WriteDirective] = []

        for label, an, call in _trigger_calls(pkg, triggers):
            try:
                produced.extend(call(str(to_dir), an, **options))
            except GenerationError as e:
                logger.warning("%s: @%s on %s failed: %s", pkg.name, an.name, label, e)
                result.failures.append(
                    AnnotationFailure(
                        package=pkg.name, annotation=an.name, target=label, error=str(e),
                    )
                )

        result.directives.extend(produced)
        result.report.merge(
            write_directives(produced, to_dir, dry_run=dry_run, claimed=claimed)
        )

    logger.info(
        "Generated %d file(s), %d failure(s), %d write failure(s)",
        len(result.directives), len(result.failures), len(result.report.failed),
    )
    return result


def list_templates(packages: list[Package]) -> list[dict]:
    """Describe every @source annotation across the packages."""
    rows = []
    for pkg in packages:
        for an in pkg.annotations_for(SOURCE_KIND):
            rows.append({
                "package": pkg.name,
                "id": an.param("id"),
                "gen": an.param("gen") or "raw",
                "origin": "inline" if an.template else (an.param("file") or "missing"),
            })
    return rows


def _output_dir(pkg: Package, settings: Settings, out_dir: Path | None) -> Path:
    if out_dir is not None:
        return out_dir
    if settings.output_dir:
        return Path(settings.output_dir)
    return Path(pkg.path) if pkg.path else Path.cwd()


def _trigger_calls(
    pkg: Package,
    triggers: set[str],
) -> list[tuple[str, Annotation, Callable[..., list[WriteDirective]]]]:
    """Pair every trigger annotation with the adapter for its construct.

    Each callable takes ``(to_dir, annotation, **options)``.
    """
    calls: list[tuple[str, Annotation, Callable[..., list[WriteDirective]]]] = []

    def wanted(an: Annotation) -> bool:
        return an.name.lower() in triggers

    for declr in pkg.declarations:
        for an in filter(wanted, declr.annotations):
            calls.append((
                f"package {declr.package}",
                an,
                _bind(package_generator, None, declr, pkg),
            ))
        for struct in declr.structs:
            for an in filter(wanted, struct.annotations):
                calls.append((f"struct {struct.name}", an, _bind(struct_generator, struct, declr, pkg)))
        for iface in declr.interfaces:
            for an in filter(wanted, iface.annotations):
                calls.append((f"interface {iface.name}", an, _bind(interface_generator, iface, declr, pkg)))
        for ty in declr.types:
            for an in filter(wanted, ty.annotations):
                calls.append((f"type {ty.name}", an, _bind(any_type_generator, ty, declr, pkg)))

    return calls


def _bind(adapter: Callable[..., list[WriteDirective]], construct, declr, pkg):
    """Close an adapter over its construct, file and package."""
    if construct is None:
        return lambda to_dir, an, **kw: adapter(to_dir, an, declr, pkg, **kw)
    return lambda to_dir, an, **kw: adapter(to_dir, an, construct, declr, pkg, **kw)
