"""
Annotation model: a declarative marker attached to a source construct.

Annotations are user-authored, so ``params`` and ``attrs`` stay open
mappings. The set of recognised keys (``id``, ``file``, ``gen``, ...)
is a soft contract owned by the generators, not a schema.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Annotation(BaseModel):
    """A named annotation with its parameters, attributes and arguments.

    Attributes:
        name:      Annotation name as written (``makeFor``, ``source``).
        params:    String parameters (``id => "stringer"``).
        attrs:     Structured attributes of arbitrary shape.
        arguments: Bare positional arguments.
        template:  Inline template body, empty when none was given.
        defer:     Whether the annotation asked to be deferred.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    params: dict[str, str] = Field(default_factory=dict)
    attrs: dict[str, Any] = Field(default_factory=dict)
    arguments: list[str] = Field(default_factory=list)
    template: str = ""
    defer: bool = False

    def param(self, key: str) -> str:
        """Return a parameter value, or an empty string when unset."""
        return self.params.get(key, "")

    def attr(self, key: str) -> Any:
        """Return an attribute value, or None when unset."""
        return self.attrs.get(key)

    def has_arg(self, name: str) -> bool:
        """Check whether a bare argument was given."""
        return name in self.arguments

    def is_kind(self, kind: str) -> bool:
        """Case-insensitive match of the annotation name."""
        return self.name.lower() == kind.lower()
