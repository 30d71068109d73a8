"""CLI interface for manual-pages."""

import asyncio
import logging
import pathlib
from time import perf_counter
from typing import Optional

import click

from . import builder
from .config import BuildConfig, ConfigError, load_config
from .logging import ConsoleReporter, format_duration_ms


def _load_build_config(
    config_file: Optional[pathlib.Path], **overrides
) -> BuildConfig:
    try:
        base = load_config(config_file) if config_file else None
        if base is None:
            if not overrides.get("patterns"):
                raise click.UsageError("Give at least one pattern or a --config file.")
            if overrides.get("build_dir") is None:
                overrides["build_dir"] = pathlib.Path("build")
        return BuildConfig.from_config_and_kwargs(base, **overrides)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e
    except OSError as e:
        raise click.ClickException(f"Could not read {config_file}: {e}") from e


@click.group()
@click.version_option(package_name="manual-pages")
@click.option("--debug", is_flag=True, help="Show debug logging.")
def main(debug: bool):
    """Compile manual test scripts into standalone HTML pages."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("patterns", nargs=-1)
@click.option(
    "--build-dir",
    "-o",
    type=click.Path(path_type=pathlib.Path),
    help="Output directory (default: build)",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=pathlib.Path),
    help="TOML file with build settings",
)
@click.option("--language", type=str, help="UI language, adds its translation script")
@click.option(
    "--additional-language",
    "additional_languages",
    type=str,
    multiple=True,
    help="Extra translation to load. Can be specified multiple times.",
)
@click.option(
    "--root",
    type=click.Path(file_okay=False, path_type=pathlib.Path),
    help="Directory output paths are made relative to (default: current directory)",
)
@click.option(
    "--entry-dir",
    type=str,
    help="Only compile scripts inside directories with this name (e.g. 'manual')",
)
@click.option("--silent", is_flag=True, help="Do not print progress lines.")
@click.option("--production", is_flag=True, help="Build once without watching.")
@click.option("--clean", is_flag=True, help="Remove the build directory first.")
def build(
    patterns: tuple,
    build_dir: Optional[pathlib.Path],
    config_file: Optional[pathlib.Path],
    language: Optional[str],
    additional_languages: tuple,
    root: Optional[pathlib.Path],
    entry_dir: Optional[str],
    silent: bool,
    production: bool,
    clean: bool,
):
    """Build pages for every script matching PATTERNS, then watch for changes."""
    config = _load_build_config(
        config_file,
        build_dir=build_dir,
        patterns=list(patterns),
        language=language,
        additional_languages=list(additional_languages),
        root=root,
        entry_dir=entry_dir,
        silent=silent or None,
        production=production or None,
    )
    reporter = ConsoleReporter()

    start = perf_counter()
    try:
        if clean:
            builder.clean_build_dir(config.build_dir, reporter, silent=config.silent)
        result, controller = builder.compile_pages(config, reporter=reporter)
    except (OSError, ValueError) as e:
        raise click.ClickException(str(e)) from e

    if not config.silent:
        duration = format_duration_ms((perf_counter() - start) * 1000)
        click.echo(
            f"Built {len(result.pages)} pages "
            f"({len(result.static_files)} static files) in {duration}."
        )

    if controller is None:
        return

    click.echo(f"Watching {len(controller.watched_paths)} files for changes...")
    try:
        asyncio.run(controller.run())
    except KeyboardInterrupt:
        click.echo("\nStopping watcher...")
        controller.stop()


@main.command()
@click.option(
    "--build-dir",
    "-o",
    type=click.Path(path_type=pathlib.Path),
    default="build",
    help="Output directory to remove",
)
def clean(build_dir: pathlib.Path):
    """Remove the build directory."""
    try:
        removed = builder.clean_build_dir(build_dir, ConsoleReporter())
    except (OSError, ValueError) as e:
        raise click.ClickException(str(e)) from e
    if not removed:
        click.echo(f"Nothing to remove at {build_dir}")


if __name__ == "__main__":
    main()
