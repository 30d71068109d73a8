"""Mirror static assets that live next to manual test entries."""

import logging
import pathlib
import shutil
from typing import Callable, Iterable, List, Optional

from .config import BuildConfig
from .entries import Entry
from .file_resolver import SOURCE_EXTENSIONS, find_static_assets, static_asset_pattern
from .paths import PathLike, normalize_path, relative_to_root, to_fs_path

logger = logging.getLogger(__name__)

AssetFinder = Callable[[pathlib.PurePosixPath], Iterable[PathLike]]


def is_source_file(path: PathLike) -> bool:
    """True for files that belong to an entry rather than to its assets."""
    return normalize_path(path).suffix.lstrip(".") in SOURCE_EXTENSIONS


def collect_static_assets(
    entries: Iterable[Entry], finder: Optional[AssetFinder] = None
) -> List[pathlib.PurePosixPath]:
    """Static files below every distinct entry directory, in discovery order.

    The wildcard pattern lets names like ``some.file.md`` through; those are
    dropped here by their final suffix.
    """
    finder = finder or find_static_assets
    directories = list(dict.fromkeys(entry.containing_dir for entry in entries))

    assets = []
    for directory in directories:
        logger.debug(f"Looking for static assets: {static_asset_pattern(directory)}")
        for path in finder(directory):
            path = normalize_path(path)
            if is_source_file(path):
                continue
            assets.append(path)
    return list(dict.fromkeys(assets))


def static_output_path(
    asset: PathLike, build_dir: PathLike, root: Optional[PathLike]
) -> pathlib.PurePosixPath:
    return normalize_path(build_dir) / relative_to_root(asset, root)


def copy_static_file(source: PathLike, target: PathLike) -> None:
    """Copy one file, replacing any previous copy."""
    target = to_fs_path(target)
    target.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(to_fs_path(source), target)


def mirror_static_assets(
    entries: Iterable[Entry],
    config: BuildConfig,
    finder: Optional[AssetFinder] = None,
    copy: Callable[[PathLike, PathLike], None] = copy_static_file,
) -> List[pathlib.PurePosixPath]:
    """Copy every static asset of ``entries`` under the build directory.

    Returns the output paths that were written.
    """
    written = []
    for asset in collect_static_assets(entries, finder):
        target = static_output_path(asset, config.build_dir, config.root)
        copy(asset, target)
        logger.debug(f"Copied {asset} -> {target}")
        written.append(target)

    logger.debug(f"Copied {len(written)} static files to {config.build_dir}")
    return written
