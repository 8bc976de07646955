"""
Directive writer: put WriteDirectives on disk.

Files that already exist are left alone unless the directive allows
overwriting. Writes are atomic (write to temp file, then rename) so a
crash never leaves a half-written generated file behind.

A directive that cannot be written is recorded in the report and the
remaining directives are still processed.
"""

from __future__ import annotations

import logging
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from templa.core.models.directive import WriteDirective

logger = logging.getLogger(__name__)


@dataclass
class WriteFailure:
    """A directive that was not written."""

    file_name: str
    error: str


@dataclass
class WriteReport:
    """What happened to each directive."""

    written: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)
    failed: list[WriteFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed

    def merge(self, other: WriteReport) -> None:
        self.written.extend(other.written)
        self.skipped.extend(other.skipped)
        self.failed.extend(other.failed)

    def to_dict(self) -> dict:
        return {
            "written": [str(p) for p in self.written],
            "skipped": [str(p) for p in self.skipped],
            "failed": [{"file_name": f.file_name, "error": f.error} for f in self.failed],
        }


def write_directives(
    directives: list[WriteDirective],
    out_dir: Path,
    *,
    dry_run: bool = False,
    claimed: set[Path] | None = None,
) -> WriteReport:
    """Write each directive under ``out_dir``.

    Args:
        directives: Output of the generators.
        out_dir: Base directory for the relative file names.
        dry_run: Report what would be written without touching disk.
        claimed: Paths already produced earlier in the same run. Shared
            across calls so two packages writing into one directory
            are checked against each other; updated in place.

    Returns:
        WriteReport listing written, skipped and failed paths.
    """
    report = WriteReport()
    claimed = set() if claimed is None else claimed
    base = out_dir.resolve()

    for directive in directives:
        target = out_dir / directive.file_name
        resolved = target.resolve()

        if not resolved.is_relative_to(base):
            logger.warning("Refusing %s: outside %s", directive.file_name, out_dir)
            report.failed.append(
                WriteFailure(directive.file_name, f"resolves outside output directory {out_dir}")
            )
            continue

        if resolved in claimed:
            logger.warning("%s generated more than once in this run", target)
            report.failed.append(
                WriteFailure(directive.file_name, "generated more than once in this run")
            )
            continue
        claimed.add(resolved)

        if target.exists() and not directive.overwrite:
            logger.info("Keeping existing %s", target)
            report.skipped.append(target)
            continue

        if not dry_run:
            try:
                _atomic_write(target, directive.to_bytes())
            except OSError as e:
                logger.error("Failed to write %s: %s", target, e)
                report.failed.append(WriteFailure(directive.file_name, str(e)))
                continue
        report.written.append(target)

    return report


def _atomic_write(path: Path, payload: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)

    _fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=".templa_", suffix=".tmp")
    tmp = Path(tmp_path)
    try:
        with open(_fd, "wb") as fh:
            fh.write(payload)
        tmp.replace(path)
        logger.debug("Wrote %s (%d bytes)", path, len(payload))
    except Exception:
        tmp.unlink(missing_ok=True)
        raise
