"""Glob pattern resolution for entry scripts and static assets."""

import glob
import logging
import pathlib
import re
from typing import Callable, Iterable, List, Optional

from .paths import PathLike, normalize_path, to_fs_path

logger = logging.getLogger(__name__)

SOURCE_EXTENSIONS = ("js", "html", "md")

# Equivalent of the extglob ``*.!(js|html|md)``. The negation applies to
# everything after the first dot that lets the name match, so a name such as
# ``some.file.md`` still matches (``*`` takes "some", the rest is "file.md").
_STATIC_NAME_RE = re.compile(
    r"^(?!\.)[^/]*\.(?!(?:%s)$)[^/]*$" % "|".join(SOURCE_EXTENSIONS)
)

GlobFunction = Callable[[str], Iterable[PathLike]]


def glob_files(pattern: str, root: Optional[PathLike] = None) -> List[pathlib.PurePosixPath]:
    """Expand one glob pattern into a sorted list of normalized file paths.

    Relative patterns are matched against ``root``; ``**`` spans directories.
    """
    pattern = normalize_path(pattern).as_posix()
    root_dir = to_fs_path(root) if root is not None else pathlib.Path.cwd()
    matches = []
    for match in glob.glob(pattern, root_dir=root_dir, recursive=True):
        path = root_dir / match
        if path.is_file():
            matches.append(normalize_path(path))
    return sorted(matches)


def resolve_patterns(
    patterns: Iterable[str],
    root: Optional[PathLike] = None,
    glob_fn: Optional[GlobFunction] = None,
) -> List[pathlib.PurePosixPath]:
    """Resolve every pattern and merge the results.

    Order follows the patterns, then each pattern's matches; a path matched by
    an earlier pattern is not repeated. A pattern without matches contributes
    nothing.
    """
    if glob_fn is None:

        def glob_fn(pattern):
            return glob_files(pattern, root)

    seen = set()
    resolved = []
    for pattern in patterns:
        matches = [normalize_path(p) for p in glob_fn(pattern)]
        if not matches:
            logger.debug(f"Pattern matched no files: {pattern}")
        for path in matches:
            if path not in seen:
                seen.add(path)
                resolved.append(path)
    return resolved


def static_asset_pattern(directory: PathLike) -> str:
    """The wildcard pattern used to find static assets below ``directory``."""
    name_pattern = "*.!({})".format("|".join(SOURCE_EXTENSIONS))
    return (normalize_path(directory) / "**" / name_pattern).as_posix()


def matches_static_pattern(name: str) -> bool:
    """Check a file name against ``*.!(js|html|md)``."""
    return bool(_STATIC_NAME_RE.match(name))


def find_static_assets(directory: PathLike) -> List[pathlib.PurePosixPath]:
    """All files below ``directory`` (recursively) matching the static pattern.

    Hidden files and anything inside hidden directories are skipped, as the
    glob ``**`` does not descend into them.
    """
    base = to_fs_path(directory)
    if not base.is_dir():
        return []

    assets = []
    for path in base.rglob("*"):
        rel_parts = path.relative_to(base).parts
        if any(part.startswith(".") for part in rel_parts):
            continue
        if path.is_file() and matches_static_pattern(path.name):
            assets.append(normalize_path(path))
    return sorted(assets)
