"""Build configuration for manual test pages."""

import pathlib
import tomllib
from dataclasses import dataclass, field, fields
from typing import Any, Mapping, Optional

TOOL_TABLE = "manual-pages"

# Accepted mapping keys -> BuildConfig field names
_KEY_ALIASES = {
    "buildDir": "build_dir",
    "build_dir": "build_dir",
    "patterns": "patterns",
    "language": "language",
    "additionalLanguages": "additional_languages",
    "additional_languages": "additional_languages",
    "silent": "silent",
    "production": "production",
    "root": "root",
    "template": "template_path",
    "template_path": "template_path",
    "entryDir": "entry_dir",
    "entry_dir": "entry_dir",
}

_PATH_FIELDS = {"build_dir", "root", "template_path"}


class ConfigError(ValueError):
    """Raised when a configuration file or mapping is invalid."""


def _as_list(value) -> list[str]:
    # a single string is one item, not a sequence of characters
    if isinstance(value, str):
        return [value]
    return list(value)


@dataclass
class BuildConfig:
    """Configuration for compiling manual test pages."""

    build_dir: pathlib.Path
    patterns: list[str]
    language: Optional[str] = None
    additional_languages: list[str] = field(default_factory=list)
    silent: bool = False
    production: bool = False
    root: pathlib.Path = field(default_factory=pathlib.Path.cwd)
    template_path: Optional[pathlib.Path] = None
    entry_dir: Optional[str] = None

    def __post_init__(self):
        self.build_dir = pathlib.Path(self.build_dir)
        self.root = pathlib.Path(self.root).absolute()
        if self.template_path is not None:
            self.template_path = pathlib.Path(self.template_path)
        self.patterns = _as_list(self.patterns)
        self.additional_languages = _as_list(self.additional_languages)
        if not self.patterns:
            raise ConfigError("At least one entry pattern is required.")

    @property
    def languages(self) -> list[str]:
        """Languages that get a translation script, primary first."""
        if not self.language:
            return []
        return [self.language, *self.additional_languages]

    @classmethod
    def from_mapping(
        cls, data: Mapping[str, Any], base_dir: Optional[pathlib.Path] = None
    ) -> "BuildConfig":
        """Create a BuildConfig from a plain mapping (e.g. parsed TOML).

        Relative paths are resolved against ``base_dir`` when given.
        """
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = _KEY_ALIASES.get(key)
            if name is None:
                raise ConfigError(f"Unknown configuration key: {key!r}")
            if name in _PATH_FIELDS and value is not None:
                value = pathlib.Path(value)
                if base_dir is not None and not value.is_absolute():
                    value = base_dir / value
            kwargs[name] = value

        for required in ("build_dir", "patterns"):
            if required not in kwargs:
                raise ConfigError(f"Missing required configuration key: {required!r}")
        if base_dir is not None and "root" not in kwargs:
            kwargs["root"] = base_dir
        return cls(**kwargs)

    @classmethod
    def from_config_and_kwargs(
        cls, config: Optional["BuildConfig"] = None, **kwargs
    ) -> "BuildConfig":
        """Create a BuildConfig from an optional existing config and overrides.

        Overrides set to ``None`` (or empty sequences) are ignored.
        """
        overrides = {
            key: value
            for key, value in kwargs.items()
            if value is not None and value != () and value != []
        }
        if config is None:
            return cls(**overrides)

        config_dict = {f.name: getattr(config, f.name) for f in fields(cls)}
        config_dict.update(overrides)
        return cls(**config_dict)


def load_config(path: pathlib.Path) -> BuildConfig:
    """Load a BuildConfig from a TOML file.

    Settings may sit at the top level or under ``[tool.manual-pages]``, so a
    ``pyproject.toml`` works as well as a dedicated file.
    """
    with open(path, "rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    table = data.get("tool", {}).get(TOOL_TABLE)
    if table is None:
        table = {k: v for k, v in data.items() if k != "tool"}
    return BuildConfig.from_mapping(table, base_dir=path.parent.resolve())
