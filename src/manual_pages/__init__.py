"""Compile manual test scripts into standalone HTML pages."""

__version__ = "2025.4.1"

# Re-export the public API for easy access
from .builder import BuildResult, build, clean_build_dir, compile_pages
from .config import BuildConfig, ConfigError, load_config
from .entries import Entry, build_entries
from .file_resolver import resolve_patterns
from .generator import PageGenerator
from .watcher import WatchController

__all__ = [
    "__version__",
    # Pipeline
    "build",
    "compile_pages",
    "clean_build_dir",
    "BuildResult",
    # Configuration
    "BuildConfig",
    "ConfigError",
    "load_config",
    # Building blocks
    "Entry",
    "build_entries",
    "resolve_patterns",
    "PageGenerator",
    "WatchController",
]
