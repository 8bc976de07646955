"""
Binding entry points: one per annotated construct kind.

Each wraps its construct into a ``BindingContext`` and hands off to
``handle_generation``. Keyword options (formatter, file suffix, ...)
are forwarded untouched.

Annotation: @makeFor
"""

from __future__ import annotations

from typing import Any

from templa.core.models.annotation import Annotation
from templa.core.models.binding import BindingContext
from templa.core.models.declarations import (
    InterfaceDeclaration,
    Package,
    PackageDeclaration,
    StructDeclaration,
    TypeDeclaration,
)
from templa.core.models.directive import WriteDirective
from templa.core.services.generators.dispatcher import handle_generation


def struct_generator(
    to_dir: str,
    an: Annotation,
    ty: StructDeclaration,
    pkg_declr: PackageDeclaration,
    pkg: Package,
    **options: Any,
) -> list[WriteDirective]:
    """Render the @source template referenced by a struct annotation.

    The template sees the struct as ``struct_declr``.
    """
    binding = BindingContext(
        annotation=an, pkg_declr=pkg_declr, package=pkg, struct_declr=ty,
    )
    return handle_generation(to_dir, an, pkg_declr, pkg, binding, **options)


def interface_generator(
    to_dir: str,
    an: Annotation,
    ty: InterfaceDeclaration,
    pkg_declr: PackageDeclaration,
    pkg: Package,
    **options: Any,
) -> list[WriteDirective]:
    """Render the @source template referenced by an interface annotation.

    The template sees the interface as ``interface_declr``.
    """
    binding = BindingContext(
        annotation=an, pkg_declr=pkg_declr, package=pkg, interface_declr=ty,
    )
    return handle_generation(to_dir, an, pkg_declr, pkg, binding, **options)


def package_generator(
    to_dir: str,
    an: Annotation,
    pkg_declr: PackageDeclaration,
    pkg: Package,
    **options: Any,
) -> list[WriteDirective]:
    """Render the @source template referenced by a package annotation."""
    binding = BindingContext(annotation=an, pkg_declr=pkg_declr, package=pkg)
    return handle_generation(to_dir, an, pkg_declr, pkg, binding, **options)


def any_type_generator(
    to_dir: str,
    an: Annotation,
    ty: TypeDeclaration,
    pkg_declr: PackageDeclaration,
    pkg: Package,
    **options: Any,
) -> list[WriteDirective]:
    """Render the @source template referenced by a type annotation.

    The template sees the type as ``type_declr``.
    """
    binding = BindingContext(
        annotation=an, pkg_declr=pkg_declr, package=pkg, type_declr=ty,
    )
    return handle_generation(to_dir, an, pkg_declr, pkg, binding, **options)
