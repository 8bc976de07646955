"""
Generation dispatcher: render the @source template a requesting
annotation points at, and shape the result into write directives.

Flow for one requesting annotation::

    annotation.params["id"] ──► package.annotations_for("source")
                                      │  (match by id)
                                      ▼
                             inline template | file
                                      │
                                      ▼
                    Jinja2 render (binding + accessor table)
                                      │
                                      ▼
                     classify by @source "gen" parameter
                                      │
                                      ▼
                              [WriteDirective]

Recognised ``gen`` values:
    partial.go        rendered block wrapped in a package clause, formatted
    partial_test.go   as partial.go, package name suffixed with ``_test``
    go                rendered block, formatted
    anything else     rendered block, untouched
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

import jinja2
from jinja2.sandbox import SandboxedEnvironment

from templa.core.models.annotation import Annotation
from templa.core.models.binding import BindingContext
from templa.core.models.declarations import Package, PackageDeclaration
from templa.core.models.directive import WriteDirective
from templa.core.services.generators.accessors import (
    AnnotationAccessors,
    template_functions,
)
from templa.core.services.generators.errors import (
    MissingTemplateID,
    NoMatchingTemplate,
    NoTemplateProvided,
    NoTemplatesInPackage,
    TemplateFileMissing,
    TemplateRenderError,
)
from templa.core.services.generators.formatter import Formatter, normalize_source
from templa.core.services.packages import PackageNamer, which_package

logger = logging.getLogger(__name__)

SOURCE_KIND = "source"
DEFAULT_FILE_SUFFIX = "_impl_gen.go"

TemplateReader = Callable[[Path], str]


def read_template_file(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def handle_generation(
    to_dir: str,
    an: Annotation,
    pkg_declr: PackageDeclaration,
    pkg: Package,
    binding: BindingContext,
    *,
    package_namer: PackageNamer = which_package,
    read_template: TemplateReader = read_template_file,
    formatter: Formatter = normalize_source,
    file_suffix: str = DEFAULT_FILE_SUFFIX,
) -> list[WriteDirective]:
    """Generate the files requested by ``an``.

    Args:
        to_dir:        Output directory; used to derive package names.
        an:            The requesting annotation (must carry ``id``).
        pkg_declr:     File the annotation was found in.
        pkg:           Package searched for @source annotations.
        binding:       Substitution root for the template.
        package_namer: Resolves a package name for ``to_dir``.
        read_template: Reads external template files.
        formatter:     Post-processor for ``go`` and ``partial*.go`` output.
        file_suffix:   Appended to the lowercased annotation name when
                       no ``filename`` parameter is given.

    Returns:
        Exactly one WriteDirective, with overwrite disabled.

    Raises:
        GenerationError: any of its subclasses; nothing is returned then.
    """
    template_id = an.params.get("id", "")
    if not template_id:
        raise MissingTemplateID(an.name)

    templaters = pkg.annotations_for(SOURCE_KIND)
    if not templaters:
        raise NoTemplatesInPackage(pkg.name)

    target = _select_template(template_id, templaters)
    template_data = _resolve_template_text(target, template_id, pkg_declr, read_template)

    file_name = an.params.get("filename") or f"{an.name.lower()}{file_suffix}"

    funcs = template_functions(AnnotationAccessors(an), AnnotationAccessors(target))
    block = _render(template_id, template_data, funcs, binding)

    gen_name = target.param("gen").lower()
    reason = f"@{an.name} rendered from @source '{template_id}'"

    if gen_name in ("partial.go", "partial_test.go"):
        package_name = an.param("packageName") or package_namer(to_dir, pkg)
        if gen_name == "partial_test.go":
            package_name = f"{package_name}_test"

        directive = WriteDirective(
            file_name=file_name,
            content=formatter(f"package {package_name}\n\n{block}"),
            overwrite=False,
            formatted=True,
            reason=reason,
        )
    elif gen_name == "go":
        directive = WriteDirective(
            file_name=file_name,
            content=formatter(block),
            overwrite=False,
            formatted=True,
            reason=reason,
        )
    else:
        directive = WriteDirective(
            file_name=file_name,
            content=block,
            overwrite=False,
            reason=reason,
        )

    logger.info(
        "Generated %s from @source '%s' (gen=%s)",
        file_name, template_id, gen_name or "raw",
    )
    return [directive]


def _select_template(template_id: str, templaters: list[Annotation]) -> Annotation:
    """First @source annotation whose own ``id`` equals ``template_id``."""
    for candidate in templaters:
        if candidate.param("id") == template_id:
            logger.debug("Matched @source '%s'", template_id)
            return candidate

    raise NoMatchingTemplate(
        template_id, [c.param("id") for c in templaters if c.param("id")]
    )


def _resolve_template_text(
    target: Annotation,
    template_id: str,
    pkg_declr: PackageDeclaration,
    read_template: TemplateReader,
) -> str:
    """Inline template text, or the contents of the ``file`` parameter."""
    if target.template:
        return target.template

    template_file = target.params.get("file")
    if not template_file:
        raise NoTemplateProvided(template_id)

    # Relative to the declaring file, even when written with a leading slash
    base_dir = Path(pkg_declr.file_path).parent
    path = base_dir / template_file.lstrip("/\\")

    logger.debug("Reading template for '%s' from %s", template_id, path)
    try:
        return read_template(path)
    except OSError as e:
        raise TemplateFileMissing(str(path), str(e)) from e


def _render(
    template_id: str,
    template_data: str,
    funcs: dict[str, Callable],
    binding: BindingContext,
) -> str:
    # Templates are user-authored: attribute access and calls only, no internals
    env = SandboxedEnvironment(
        undefined=jinja2.StrictUndefined,
        keep_trailing_newline=True,
        autoescape=False,
    )
    env.globals.update(funcs)

    try:
        template = env.from_string(template_data)
        return template.render(binding.template_vars())
    except jinja2.TemplateSyntaxError as e:
        raise TemplateRenderError(
            f"@source '{template_id}': syntax error on line {e.lineno}: {e.message}"
        ) from e
    except jinja2.TemplateError as e:
        raise TemplateRenderError(f"@source '{template_id}': {e}") from e
