"""Site configuration loaded from .folio.toml, env vars, and CLI flags.

Loading order: defaults → TOML file → env vars → CLI flags.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator

from folio.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".folio.toml"
CONFIG_SEARCH_PATHS = [
    Path("."),
]
GLOBAL_CONFIG = Path.home() / ".config" / "folio" / "config.toml"


class NavLink(BaseModel):
    """Entry in the site navigation bar."""

    label: str
    href: str


class SiteConfig(BaseModel):
    """[site] section."""

    title: str = "My Blog"
    author: str = ""
    description: str = ""
    base_url: str = ""
    nav: list[NavLink] = Field(
        default_factory=lambda: [
            NavLink(label="Blog", href="/"),
            NavLink(label="About", href="/about/"),
        ]
    )


class ContentConfig(BaseModel):
    """[content] section. Relative paths resolve against ``directory``."""

    directory: str = "./content"
    posts_dir: str = "posts"
    extension: str = ".md"
    experience_file: str = "experience.json"
    about_file: str = "about.md"

    @field_validator("extension")
    @classmethod
    def _dotted(cls, value: str) -> str:
        value = value.strip()
        return value if value.startswith(".") else f".{value}"

    @property
    def root(self) -> Path:
        return Path(self.directory)

    @property
    def posts_path(self) -> Path:
        return self.root / self.posts_dir

    @property
    def experience_path(self) -> Path:
        return self.root / self.experience_file

    @property
    def about_path(self) -> Path:
        return self.root / self.about_file


class OutputConfig(BaseModel):
    """[output] section."""

    directory: str = "./public"


class TemplatesConfig(BaseModel):
    """[templates] section. Empty directory means packaged templates only."""

    directory: str = ""

    @property
    def path(self) -> Path | None:
        return Path(self.directory) if self.directory else None


class FolioConfig(BaseModel):
    """Top-level configuration."""

    site: SiteConfig = Field(default_factory=SiteConfig)
    content: ContentConfig = Field(default_factory=ContentConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    templates: TemplatesConfig = Field(default_factory=TemplatesConfig)


def load_config(path: str | Path | None = None) -> FolioConfig:
    """Load configuration from a TOML file.

    Search order:
    1. Explicit path (if provided)
    2. .folio.toml in CWD
    3. ~/.config/folio/config.toml

    Then overlay environment variables.

    Args:
        path: Explicit path to a TOML file.

    Returns:
        Merged FolioConfig.

    Raises:
        ConfigError: If the file parses but its values have the wrong shape.
    """
    data: dict[str, object] = {}
    source: Path | None = None

    if path is not None:
        toml_path = Path(path)
        if toml_path.exists():
            data = _load_toml(toml_path)
            source = toml_path
        else:
            logger.warning("Config file not found: %s", toml_path)
    else:
        for search_dir in CONFIG_SEARCH_PATHS:
            candidate = search_dir / CONFIG_FILENAME
            if candidate.exists():
                data = _load_toml(candidate)
                source = candidate
                logger.info("Loaded config from %s", candidate)
                break
        if not data and GLOBAL_CONFIG.exists():
            data = _load_toml(GLOBAL_CONFIG)
            source = GLOBAL_CONFIG
            logger.info("Loaded config from %s", GLOBAL_CONFIG)

    config = _validate(data, source) if data else FolioConfig()

    # Overlay environment variables
    config = _apply_env_vars(config)

    return config


def merge_cli_overrides(config: FolioConfig, **cli_kwargs: object) -> FolioConfig:
    """Overlay explicitly-set CLI flags onto the config.

    Only overrides values where the CLI flag was explicitly provided
    (i.e., not None).
    """
    data = config.model_dump()

    mapping: dict[str, tuple[str, str]] = {
        "content_directory": ("content", "directory"),
        "output_directory": ("output", "directory"),
        "templates_directory": ("templates", "directory"),
        "site_title": ("site", "title"),
    }

    for key, value in cli_kwargs.items():
        if value is None:
            continue
        if key in mapping:
            section, field = mapping[key]
            data[section][field] = str(value) if isinstance(value, Path) else value
        else:
            logger.debug("Ignoring unknown CLI override %s", key)

    return _validate(data, "command-line options")


def _validate(data: dict[str, object], source: Path | str | None) -> FolioConfig:
    """Validate raw config data, reporting shape errors as ConfigError."""
    try:
        return FolioConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(str(exc), source) from exc


def _load_toml(path: Path) -> dict[str, object]:
    """Read a TOML file; returns an empty dict if it cannot be parsed."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        logger.warning("Failed to parse %s: %s", path, exc)
        return {}


ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "FOLIO_CONTENT_DIR": ("content", "directory"),
    "FOLIO_OUTPUT_DIR": ("output", "directory"),
    "FOLIO_TEMPLATES_DIR": ("templates", "directory"),
    "FOLIO_SITE_TITLE": ("site", "title"),
    "FOLIO_BASE_URL": ("site", "base_url"),
}


def _apply_env_vars(config: FolioConfig) -> FolioConfig:
    """Apply environment variable overrides to config."""
    data = config.model_dump()
    changed = False
    for env_var, (section, field) in ENV_OVERRIDES.items():
        value = os.environ.get(env_var)
        if value:
            data[section][field] = value
            changed = True
    return _validate(data, "environment") if changed else config
