"""
Template accessors: the functions a template can call.

A template sees two annotations: the one that requested generation and
the ``source`` annotation that defined the template. Both are wrapped
in the same ``AnnotationAccessors`` record and published under two
parallel name sets.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from templa.core.models.annotation import Annotation


@dataclass(frozen=True)
class AnnotationAccessors:
    """Read-only view over one annotation, callable from templates."""

    annotation: Annotation

    def sel(self, key: str) -> str:
        return self.annotation.param(key)

    def attr(self, key: str) -> Any:
        return self.annotation.attr(key)

    def has_arg(self, name: str) -> bool:
        return self.annotation.has_arg(name)

    def defer(self) -> bool:
        return self.annotation.defer

    def template(self) -> str:
        return self.annotation.template

    def params(self) -> dict[str, str]:
        return dict(self.annotation.params)

    def attrs(self) -> dict[str, Any]:
        return dict(self.annotation.attrs)

    def arguments(self) -> list[str]:
        return list(self.annotation.arguments)


def template_functions(
    requesting: AnnotationAccessors,
    target: AnnotationAccessors,
) -> dict[str, Callable[..., Any]]:
    """Build the name table installed as template globals."""
    return {
        # Requesting annotation
        "sel": requesting.sel,
        "params": requesting.sel,
        "attrs": requesting.attr,
        "hasArg": requesting.has_arg,
        "annotationDefer": requesting.defer,
        "annotationTemplate": requesting.template,
        "annotationParams": requesting.params,
        "annotationAttrs": requesting.attrs,
        "annotationArguments": requesting.arguments,
        # Matched @source annotation
        "targetSel": target.sel,
        "targetParams": target.sel,
        "targetAttrs": target.attr,
        "targetHasArg": target.has_arg,
        "targetDefer": target.defer,
        "targetTemplate": target.template,
        "targetArguments": target.arguments,
        "targetAnnotationParams": target.params,
        "targetAnnotationAttrs": target.attrs,
    }
