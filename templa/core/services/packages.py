"""
Package naming: decide the package clause for generated partial files.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Callable

from templa.core.models.declarations import Package

PackageNamer = Callable[[str, Package], str]

_INVALID_CHARS = re.compile(r"[\s.\-]+")


def which_package(to_dir: str, package: Package) -> str:
    """Return the package name for files written into ``to_dir``.

    Writing into the package's own directory keeps its name. Writing
    anywhere else uses the directory's base name, lowercased and with
    separators turned into underscores.
    """
    if not to_dir:
        return package.name

    target = Path(to_dir).resolve()
    if package.path and Path(package.path).resolve() == target:
        return package.name

    return _INVALID_CHARS.sub("_", target.name.lower()) or package.name
