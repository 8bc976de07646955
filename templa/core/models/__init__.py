"""
Domain models: Pydantic types for templa.

All models are re-exported here for convenient access:

    from templa.core.models import Annotation, Package, WriteDirective
"""

from templa.core.models.annotation import Annotation
from templa.core.models.binding import BindingContext
from templa.core.models.declarations import (
    FieldDeclaration,
    InterfaceDeclaration,
    MethodDeclaration,
    Package,
    PackageDeclaration,
    StructDeclaration,
    TypeDeclaration,
)
from templa.core.models.directive import WriteDirective

__all__ = [
    # annotation.py
    "Annotation",
    # binding.py
    "BindingContext",
    # declarations.py
    "FieldDeclaration",
    "InterfaceDeclaration",
    "MethodDeclaration",
    "Package",
    "PackageDeclaration",
    "StructDeclaration",
    "TypeDeclaration",
    # directive.py
    "WriteDirective",
]
