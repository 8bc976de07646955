"""
Manifest loader: reads a package manifest YAML into a Package model.

A manifest is the declaration dump an AST extractor would produce::

    name: shapes
    path: .                      # package dir, relative to the manifest
    files:
      - path: shapes.go
        package: shapes
        annotations:             # package-level
          - name: source
            params: {id: stringer, gen: partial.go}
            template: |
              func (s {{ struct_declr.name }}) String() string { ... }
        structs:
          - name: Circle
            fields: [{name: Radius, type: float64}]
            annotations:
              - name: makeFor
                params: {id: stringer}
        interfaces: []
        types: []
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from templa.core.models.declarations import Package

logger = logging.getLogger(__name__)


class ManifestError(Exception):
    """Raised when a package manifest cannot be loaded."""


def load_package(path: Path) -> Package:
    """Load one package manifest.

    Relative ``path`` entries (package dir and file paths) are resolved
    against the manifest's directory.

    Raises:
        ManifestError: missing file, bad YAML or schema mismatch.
    """
    if not path.is_file():
        raise ManifestError(f"Manifest not found: {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ManifestError(f"Cannot read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ManifestError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ManifestError(f"Expected a YAML mapping in {path}")

    _resolve_paths(data, path)

    try:
        package = Package.model_validate(data)
    except Exception as e:
        raise ManifestError(f"Invalid manifest {path}: {e}") from e

    logger.debug(
        "Loaded package '%s' from %s (%d files)",
        package.name, path, len(package.declarations),
    )
    return package


def load_packages(paths: list[Path]) -> list[Package]:
    """Load several manifests, failing on the first bad one."""
    return [load_package(p) for p in paths]


def _resolve_paths(data: dict, path: Path) -> None:
    """Turn manifest-relative paths into absolute ones, in place.

    ``files`` becomes ``declarations`` with a ``file_path`` per entry.
    """
    base = path.parent.resolve()

    package_dir = data.get("path", ".")
    if not isinstance(package_dir, str):
        raise ManifestError(f"{path}: 'path' must be a string, got {package_dir!r}")
    data["path"] = str(base / package_dir)

    files = data.pop("files", None) or []
    if not isinstance(files, list):
        raise ManifestError(f"{path}: 'files' must be a list")

    declarations = []
    for index, entry in enumerate(files):
        if not isinstance(entry, dict):
            raise ManifestError(f"{path}: files[{index}] must be a mapping")
        file_path = entry.pop("path", "")
        if not isinstance(file_path, str) or not file_path:
            raise ManifestError(
                f"{path}: files[{index}].path must be a non-empty string, got {file_path!r}"
            )
        declarations.append({
            **entry,
            "file_path": str(base / file_path),
            "package": entry.get("package", data.get("name", "")),
        })
    data["declarations"] = declarations
