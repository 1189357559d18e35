"""Configuration management for music_organizer."""

import tomllib
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, ClassVar

from music_organizer.config.file_ops import write_text_file
from music_organizer.config.paths import default_config_path
from music_organizer.config.settings import DEFAULT_SCAN_WORKERS, DEFAULT_TEMPLATE
from music_organizer.platform.logging import logger


def _path_field(default: Path | None = None) -> Any:
    """Create a field for Path objects converted in ``__post_init__``."""
    return field(default=default, metadata={"path": True})


@dataclass
class Config:
    """Application configuration.

    Every value is optional; command line flags take precedence.
    """

    # Default output directory when --output is not given
    destination: Path | None = _path_field()

    # Log file path
    log_file: Path | None = _path_field()

    template: str = DEFAULT_TEMPLATE
    case_sensitive: bool = True
    retag: bool = False
    cleanup: bool = True
    workers: int = DEFAULT_SCAN_WORKERS

    _instance: ClassVar["Config | None"] = None
    _loaded_from: ClassVar[Path | None] = None

    def __post_init__(self) -> None:
        """Convert string paths to ``Path`` objects using field metadata."""
        for f in fields(self):
            if not f.metadata.get("path", False):
                continue
            value = getattr(self, f.name)
            if isinstance(value, str):
                setattr(self, f.name, Path(value).expanduser() if value.strip() else None)
        if self.workers < 1:
            logger.warning("Ignoring invalid worker count %s", self.workers)
            self.workers = DEFAULT_SCAN_WORKERS

    def save(self, target: Path | None = None) -> Path:
        """Save configuration to ``target`` (defaults to the config path)."""
        config_dict = asdict(self)
        for key, value in config_dict.items():
            if isinstance(value, Path):
                config_dict[key] = str(value)

        destination = target or default_config_path()
        try:
            write_text_file(destination, self._render_toml(config_dict))
            logger.info("Configuration saved to %s", destination)
        except OSError as e:
            logger.error("Failed to save configuration: %s", e)
            raise
        return destination

    def _render_toml(self, config: dict[str, Any]) -> str:
        """Render configuration as TOML with inline guidance."""

        lines: list[str] = ["# music-organizer configuration file", ""]

        lines.append("# Default output directory (optional, defaults to the music directory)")
        lines.append('# Example: destination = "/path/to/library"')
        if config["destination"] is not None:
            lines.append(f"destination = {self._format_toml_value(config['destination'])}")
        lines.append("")

        lines.append("# Log file path (optional)")
        if config["log_file"] is not None:
            lines.append(f"log_file = {self._format_toml_value(config['log_file'])}")
        lines.append("")

        lines.append("# Naming template; fields: album_artist, artist, album, title, genre,")
        lines.append("# year, track, track_total, disc, disc_total, disc_prefix")
        lines.append(f"template = {self._format_toml_value(config['template'])}")
        lines.append("")

        lines.append("# Compare target paths case-sensitively when detecting collisions")
        lines.append(f"case_sensitive = {self._format_toml_value(config['case_sensitive'])}")
        lines.append("")

        lines.append("# Rewrite tags with group-consistent values after moving/copying")
        lines.append(f"retag = {self._format_toml_value(config['retag'])}")
        lines.append("")

        lines.append("# Remove directories left empty after a move")
        lines.append(f"cleanup = {self._format_toml_value(config['cleanup'])}")
        lines.append("")

        lines.append("# Threads used to read tags while scanning")
        lines.append(f"workers = {self._format_toml_value(config['workers'])}")
        lines.append("")

        return "\n".join(lines)

    def _format_toml_value(self, value: Any) -> str:
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (str, Path)):
            escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
            return f'"{escaped}"'
        return str(value)

    @classmethod
    def load(cls, config_file: Path | None = None) -> "Config":
        """Load configuration, creating a default file when none exists.

        Args:
            config_file: Explicit config path; defaults to ``default_config_path()``.

        Returns:
            Config: Loaded (and cached) configuration object.
        """
        path = config_file or default_config_path()
        if cls._instance is not None and cls._loaded_from == path:
            return cls._instance

        try:
            if path.exists():
                with open(path, "rb") as f:
                    config_dict = tomllib.load(f)

                known = {f.name for f in fields(cls)}
                unknown = sorted(set(config_dict) - known)
                if unknown:
                    logger.warning("Ignoring unknown configuration keys: %s", ", ".join(unknown))
                instance = cls(**{k: v for k, v in config_dict.items() if k in known})
                logger.debug("Configuration loaded from %s", path)
            else:
                instance = cls()
                _ = instance.save(path)
                logger.info("Created default configuration at %s", path)
        except (OSError, tomllib.TOMLDecodeError, TypeError) as e:
            logger.error("Failed to load configuration: %s", e)
            raise

        cls._instance = instance
        cls._loaded_from = path
        return instance

    @classmethod
    def reset(cls) -> None:
        """Forget the cached instance."""
        cls._instance = None
        cls._loaded_from = None


__all__ = ["Config"]
