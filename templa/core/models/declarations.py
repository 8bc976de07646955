"""
Declaration models: the parsed view of a package handed to generators.

These mirror what an AST extractor produces: a Package made of one
PackageDeclaration per source file, each holding struct, interface and
type declarations with the annotations attached to them.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from templa.core.models.annotation import Annotation


class FieldDeclaration(BaseModel):
    """A struct field."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: str = ""
    tags: str = ""


class MethodDeclaration(BaseModel):
    """An interface method signature."""

    model_config = ConfigDict(frozen=True)

    name: str
    params: list[str] = Field(default_factory=list)
    returns: list[str] = Field(default_factory=list)


class StructDeclaration(BaseModel):
    """A struct type and the annotations attached to it."""

    model_config = ConfigDict(frozen=True)

    name: str
    fields: list[FieldDeclaration] = Field(default_factory=list)
    annotations: list[Annotation] = Field(default_factory=list)


class InterfaceDeclaration(BaseModel):
    """An interface type and the annotations attached to it."""

    model_config = ConfigDict(frozen=True)

    name: str
    methods: list[MethodDeclaration] = Field(default_factory=list)
    annotations: list[Annotation] = Field(default_factory=list)


class TypeDeclaration(BaseModel):
    """A named (non-struct, non-interface) type declaration."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: str = ""
    annotations: list[Annotation] = Field(default_factory=list)


class PackageDeclaration(BaseModel):
    """A single source file of a package.

    ``file_path`` anchors relative template files: a ``source``
    annotation with ``file => "tmpl/x.tmpl"`` is read from the
    directory containing this file.
    """

    model_config = ConfigDict(frozen=True)

    package: str
    file_path: str
    annotations: list[Annotation] = Field(default_factory=list)
    structs: list[StructDeclaration] = Field(default_factory=list)
    interfaces: list[InterfaceDeclaration] = Field(default_factory=list)
    types: list[TypeDeclaration] = Field(default_factory=list)

    def all_annotations(self) -> list[Annotation]:
        """Every annotation in this file, package-level first."""
        found = list(self.annotations)
        for struct in self.structs:
            found.extend(struct.annotations)
        for iface in self.interfaces:
            found.extend(iface.annotations)
        for ty in self.types:
            found.extend(ty.annotations)
        return found


class Package(BaseModel):
    """A package: its canonical name, directory and source files."""

    model_config = ConfigDict(frozen=True)

    name: str
    path: str = ""
    declarations: list[PackageDeclaration] = Field(default_factory=list)

    def annotations_for(self, kind: str) -> list[Annotation]:
        """Return every annotation named ``kind`` across the package.

        Order follows the declarations, then each file's own order.
        """
        return [
            an
            for declr in self.declarations
            for an in declr.all_annotations()
            if an.is_kind(kind)
        ]
