"""
Binding context: the substitution root handed to the template renderer.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

from templa.core.models.annotation import Annotation
from templa.core.models.declarations import (
    InterfaceDeclaration,
    Package,
    PackageDeclaration,
    StructDeclaration,
    TypeDeclaration,
)


class BindingContext(BaseModel):
    """Per-call record of what a template is rendered against.

    At most one construct field is set; the package-only entry point
    sets none of them.
    """

    model_config = ConfigDict(frozen=True)

    annotation: Annotation
    pkg_declr: PackageDeclaration
    package: Package
    struct_declr: StructDeclaration | None = None
    interface_declr: InterfaceDeclaration | None = None
    type_declr: TypeDeclaration | None = None

    @model_validator(mode="after")
    def _single_construct(self) -> BindingContext:
        populated = [
            name
            for name in ("struct_declr", "interface_declr", "type_declr")
            if getattr(self, name) is not None
        ]
        if len(populated) > 1:
            raise ValueError(
                f"binding context takes one construct, got {', '.join(populated)}"
            )
        return self

    def template_vars(self) -> dict[str, Any]:
        """Variables visible inside the template.

        Only the construct that was bound is exposed, so a struct
        template referencing ``interface_declr`` fails loudly.
        """
        result: dict[str, Any] = {
            "annotation": self.annotation,
            "pkg_declr": self.pkg_declr,
            "package": self.package,
        }
        for name in ("struct_declr", "interface_declr", "type_declr"):
            value = getattr(self, name)
            if value is not None:
                result[name] = value
        return result
