"""
Source formatters: post-process rendered Go source.

``normalize_source`` is a pure-Python whitespace cleanup that is always
available. ``gofmt_source`` shells out to the Go toolchain's ``gofmt``
when the project has it installed.
"""

from __future__ import annotations

import logging
import re
import shutil
import subprocess
from typing import Callable

from templa.core.services.generators.errors import FormatError

logger = logging.getLogger(__name__)

Formatter = Callable[[str], str]

_BLANK_RUN = re.compile(r"\n{3,}")


def normalize_source(text: str) -> str:
    """Strip trailing whitespace and collapse blank-line runs.

    Output has no leading blank lines and ends with exactly one newline.
    Indentation is left untouched.
    """
    lines = [line.rstrip() for line in text.splitlines()]
    body = "\n".join(lines).lstrip("\n")
    body = _BLANK_RUN.sub("\n\n", body).rstrip("\n")
    return body + "\n" if body else ""


def gofmt_source(text: str) -> str:
    """Format Go source with ``gofmt``.

    Raises:
        FormatError: gofmt is not installed or rejected the source.
    """
    binary = shutil.which("gofmt")
    if binary is None:
        raise FormatError("gofmt not found on PATH")

    try:
        proc = subprocess.run(
            [binary],
            input=text,
            capture_output=True,
            text=True,
            timeout=30,
        )
    except subprocess.TimeoutExpired as e:
        raise FormatError("gofmt timed out") from e

    if proc.returncode != 0:
        raise FormatError(f"gofmt failed: {proc.stderr.strip()}")

    logger.debug("gofmt formatted %d bytes", len(text))
    return proc.stdout


def passthrough(text: str) -> str:
    return text


_FORMATTERS: dict[str, Formatter] = {
    "normalize": normalize_source,
    "gofmt": gofmt_source,
    "none": passthrough,
}


def get_formatter(name: str) -> Formatter:
    """Look up a formatter by its config name."""
    try:
        return _FORMATTERS[name]
    except KeyError:
        raise ValueError(
            f"Unknown formatter '{name}' (expected one of: {', '.join(_FORMATTERS)})"
        ) from None
