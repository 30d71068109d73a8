"""Path normalization shared by pattern matching and output path derivation."""

import pathlib
from typing import Optional, Union

PathLike = Union[str, pathlib.PurePath]


def normalize_path(path: PathLike) -> pathlib.PurePosixPath:
    """Return ``path`` with forward slashes, whatever separator it came with."""
    return pathlib.PurePosixPath(str(path).replace("\\", "/"))


def to_fs_path(path: PathLike) -> pathlib.Path:
    """Convert a normalized path back into a concrete filesystem path."""
    return pathlib.Path(str(normalize_path(path)))


def split_base(path: PathLike) -> tuple[pathlib.PurePosixPath, str]:
    """Split a file path into its directory and its name minus the final extension.

    Only the last suffix is stripped, so ``file.abc.js`` yields ``file.abc``.
    """
    normalized = normalize_path(path)
    name = normalized.name
    base, dot, _ = name.rpartition(".")
    if not dot or not base:
        base = name
    return normalized.parent, base


def has_private_segment(path: PathLike, root: Optional[PathLike] = None) -> bool:
    """True when any segment of ``path`` below ``root`` starts with an underscore."""
    return any(part.startswith("_") for part in relative_to_root(path, root).parts)


def has_segment(path: PathLike, segment: str) -> bool:
    return segment in normalize_path(path).parent.parts


def relative_to_root(path: PathLike, root: Optional[PathLike]) -> pathlib.PurePosixPath:
    """Path of ``path`` relative to ``root``.

    Paths outside the root (or when no root is given) keep their full
    structure with the anchor dropped, so they still nest under the build dir.
    """
    normalized = normalize_path(path)
    if root is not None:
        try:
            return normalized.relative_to(normalize_path(root))
        except ValueError:
            pass
    parts = normalized.parts
    # Drop "/" or a "C:" drive anchor
    if parts and (parts[0] == "/" or parts[0].endswith(":")):
        parts = parts[1:]
    return pathlib.PurePosixPath(*parts)


def script_src(path: PathLike, root: Optional[PathLike]) -> str:
    """Root-relative URL for a script, always with forward slashes."""
    return "/" + relative_to_root(path, root).as_posix()
