"""Entries: one script file plus its optional sibling documentation and markup."""

import dataclasses
import pathlib
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

from .config import BuildConfig
from .paths import (
    PathLike,
    has_private_segment,
    has_segment,
    normalize_path,
    relative_to_root,
    split_base,
    to_fs_path,
)

MARKDOWN_SUFFIX = ".md"
MARKUP_SUFFIX = ".html"


def _file_exists(path: pathlib.PurePosixPath) -> bool:
    return to_fs_path(path).is_file()


@dataclass(frozen=True)
class Entry:
    """One page to be produced.

    ``markdown_path`` and ``markup_path`` are only set when the sibling file
    existed when the entry was resolved.
    """

    script_path: pathlib.PurePosixPath
    output_path: pathlib.PurePosixPath
    markdown_path: Optional[pathlib.PurePosixPath] = None
    markup_path: Optional[pathlib.PurePosixPath] = None

    @property
    def containing_dir(self) -> pathlib.PurePosixPath:
        return self.script_path.parent

    @property
    def sibling_paths(self) -> List[pathlib.PurePosixPath]:
        """Existing sibling files, markdown first."""
        return [p for p in (self.markdown_path, self.markup_path) if p is not None]

    def refreshed(self, exists: Callable[[pathlib.PurePosixPath], bool] = _file_exists) -> "Entry":
        """Return a copy with sibling presence probed again."""
        markdown_path, markup_path = _probe_siblings(self.script_path, exists)
        return dataclasses.replace(
            self, markdown_path=markdown_path, markup_path=markup_path
        )


def is_entry_script(
    path: PathLike,
    root: Optional[PathLike] = None,
    entry_dir: Optional[str] = None,
) -> bool:
    """Whether a resolved script should become a page.

    Scripts with a ``_``-prefixed segment below the scan root are shared
    helpers, not pages. With ``entry_dir`` set, the script must also sit
    below a directory of that name.
    """
    if has_private_segment(path, root):
        return False
    if entry_dir is not None and not has_segment(path, entry_dir):
        return False
    return True


def _probe_siblings(script_path: pathlib.PurePosixPath, exists):
    directory, base = split_base(script_path)
    markdown_path = directory / (base + MARKDOWN_SUFFIX)
    markup_path = directory / (base + MARKUP_SUFFIX)
    return (
        markdown_path if exists(markdown_path) else None,
        markup_path if exists(markup_path) else None,
    )


def get_output_path(
    script_path: PathLike, build_dir: PathLike, root: Optional[PathLike]
) -> pathlib.PurePosixPath:
    """Mirror a script's location under ``build_dir`` with an ``.html`` name."""
    directory, base = split_base(script_path)
    rel_dir = relative_to_root(directory, root)
    return normalize_path(build_dir) / rel_dir / (base + ".html")


def build_entry(
    script_path: PathLike,
    config: BuildConfig,
    exists: Callable[[pathlib.PurePosixPath], bool] = _file_exists,
) -> Entry:
    script_path = normalize_path(script_path)
    markdown_path, markup_path = _probe_siblings(script_path, exists)
    return Entry(
        script_path=script_path,
        output_path=get_output_path(script_path, config.build_dir, config.root),
        markdown_path=markdown_path,
        markup_path=markup_path,
    )


def build_entries(
    script_paths: Iterable[PathLike],
    config: BuildConfig,
    exists: Callable[[pathlib.PurePosixPath], bool] = _file_exists,
) -> List[Entry]:
    """Turn resolved script paths into entries, dropping non-page scripts."""
    return [
        build_entry(path, config, exists)
        for path in script_paths
        if is_entry_script(path, config.root, config.entry_dir)
    ]
