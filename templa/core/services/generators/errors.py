"""
Generation errors: every failure ``handle_generation`` can raise.

All of them are terminal for the annotation being generated; callers
that process many annotations catch ``GenerationError`` per annotation.
"""

from __future__ import annotations


class GenerationError(Exception):
    """Base class for template generation failures."""


class MissingTemplateID(GenerationError):
    """The requesting annotation has no ``id`` parameter."""

    def __init__(self, annotation: str) -> None:
        self.annotation = annotation
        super().__init__(f"@{annotation}: no source id provided")


class NoTemplatesInPackage(GenerationError):
    """The package declares no ``source`` annotations."""

    def __init__(self, package: str) -> None:
        self.package = package
        super().__init__(f"No @source annotations found in package '{package}'")


class NoMatchingTemplate(GenerationError):
    """No ``source`` annotation carries the requested id."""

    def __init__(self, template_id: str, available: list[str]) -> None:
        self.template_id = template_id
        self.available = available
        known = ", ".join(available) if available else "none"
        super().__init__(
            f"No @source annotation with id '{template_id}' (available: {known})"
        )


class NoTemplateProvided(GenerationError):
    """The matched annotation has neither an inline template nor ``file``."""

    def __init__(self, template_id: str) -> None:
        self.template_id = template_id
        super().__init__(
            f"@source '{template_id}': expected an inline template "
            "or a `file => 'path_to_template'` parameter"
        )


class TemplateFileMissing(GenerationError):
    """The template file could not be read."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        super().__init__(f"Failed to read template file {path}: {reason}")


class TemplateRenderError(GenerationError):
    """Jinja2 rejected or failed to render the template."""


class FormatError(GenerationError):
    """The source formatter failed on rendered output."""
