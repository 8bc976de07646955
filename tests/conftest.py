"""
Shared test fixtures and configuration.
"""

import logging
from pathlib import Path

import pytest

from templa.core.models import (
    Annotation,
    FieldDeclaration,
    Package,
    PackageDeclaration,
    StructDeclaration,
)


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def make_source():
    """Factory for @source annotations."""

    def _make(template_id: str, template: str = "", **params: str) -> Annotation:
        return Annotation(
            name="source",
            params={"id": template_id, **params},
            template=template,
        )

    return _make


@pytest.fixture
def make_package(tmp_path: Path):
    """Factory for a one-file package rooted at tmp_path.

    Returns (package, pkg_declr). The struct ``Circle`` carries the
    given struct annotations; ``sources`` sit at package level.
    """

    def _make(
        sources: list[Annotation],
        struct_annotations: list[Annotation] | None = None,
        name: str = "shapes",
    ) -> tuple[Package, PackageDeclaration]:
        declr = PackageDeclaration(
            package=name,
            file_path=str(tmp_path / "shapes.go"),
            annotations=sources,
            structs=[
                StructDeclaration(
                    name="Circle",
                    fields=[FieldDeclaration(name="Radius", type="float64")],
                    annotations=struct_annotations or [],
                )
            ],
        )
        pkg = Package(name=name, path=str(tmp_path), declarations=[declr])
        return pkg, declr

    return _make


@pytest.fixture
def restore_logging():
    """Put the root logger back the way it was after a test reconfigures it."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
