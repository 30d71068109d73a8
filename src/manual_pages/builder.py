"""Main builder module that coordinates resolution, page generation and copying."""

import logging
import pathlib
import shutil
from dataclasses import dataclass, field
from typing import List, Optional

from .config import BuildConfig
from .entries import Entry, build_entries
from .file_resolver import GlobFunction, resolve_patterns
from .generator import PageGenerator, Renderer
from .logging import NullReporter
from .static import AssetFinder, mirror_static_assets
from .watcher import WatchController

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    """What a full build produced."""

    entries: List[Entry] = field(default_factory=list)
    pages: List[pathlib.Path] = field(default_factory=list)
    static_files: List[pathlib.PurePosixPath] = field(default_factory=list)


def build(
    config: BuildConfig,
    reporter=None,
    renderer: Optional[Renderer] = None,
    glob_fn: Optional[GlobFunction] = None,
    finder: Optional[AssetFinder] = None,
    generator: Optional[PageGenerator] = None,
) -> BuildResult:
    """Compile every entry matched by ``config.patterns``.

    IO and render errors propagate; pages written before the failure stay.
    """
    reporter = reporter or NullReporter()
    generator = generator or PageGenerator(config, reporter=reporter, renderer=renderer)

    script_paths = resolve_patterns(config.patterns, config.root, glob_fn)
    entries = build_entries(script_paths, config)
    logger.debug(f"Resolved {len(script_paths)} scripts into {len(entries)} entries")

    config.build_dir.mkdir(parents=True, exist_ok=True)

    static_files = mirror_static_assets(entries, config, finder=finder)
    pages = [generator.write(entry) for entry in entries]

    return BuildResult(entries=entries, pages=pages, static_files=static_files)


def compile_pages(
    config: BuildConfig,
    reporter=None,
    renderer: Optional[Renderer] = None,
    watch=None,
) -> tuple[BuildResult, Optional[WatchController]]:
    """Build all pages and, outside production, prepare a watcher for them.

    The returned controller is registered but not running; drive it with
    ``asyncio.run(controller.run())``.
    """
    reporter = reporter or NullReporter()
    generator = PageGenerator(config, reporter=reporter, renderer=renderer)
    result = build(config, reporter=reporter, generator=generator)

    if config.production:
        return result, None

    kwargs = {"watch": watch} if watch is not None else {}
    controller = WatchController(generator, reporter=reporter, **kwargs)
    controller.register(result.entries)
    return result, controller


def clean_build_dir(
    build_dir: pathlib.Path, reporter=None, silent: bool = False
) -> bool:
    """Remove the build directory. Returns False when there was nothing to remove."""
    reporter = reporter or NullReporter()
    build_dir = pathlib.Path(build_dir)
    if not build_dir.exists():
        return False

    resolved = build_dir.resolve()
    cwd = pathlib.Path.cwd().resolve()
    if resolved == cwd or resolved in cwd.parents:
        raise ValueError(
            f"Refusing to remove {build_dir}: it contains the working directory"
        )

    shutil.rmtree(build_dir)
    if not silent:
        reporter.report("removed", build_dir)
    return True
