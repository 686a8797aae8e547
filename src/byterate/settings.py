"""Utilities for composing configuration for the byterate CLI.

This module centralizes logic for parsing configuration values from multiple
sources: default dataclass attributes, optional TOML/JSON settings files,
environment variables, and direct command-line overrides. Each command has
its own settings dataclass and its own table in the settings file.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, ClassVar, Mapping

try:  # Python >=3.11
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover - fallback for older versions
    tomllib = None  # type: ignore

SETTINGS_FILE_ENV = "BYTERATE_SETTINGS_FILE"


def _to_bool(value: Any) -> bool:
    """Coerce an arbitrary value to a boolean.

    Args:
        value: The value to coerce, typically a string sourced from a settings
            file or environment variable.

    Returns:
        ``True`` or ``False`` after interpreting the input using permissive
        heuristics similar to how command-line interfaces parse flags.

    Raises:
        ValueError: If *value* cannot be interpreted as a boolean.
    """

    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "t", "yes", "y", "on"}:
            return True
        if normalized in {"0", "false", "f", "no", "n", "off"}:
            return False
    raise ValueError(f"Cannot interpret {value!r} as a boolean")


def _resolve_settings_path(
    cli_path: Path | None,
    env: Mapping[str, str],
) -> Path | None:
    """Resolve the configuration file path to load.

    Args:
        cli_path: Path provided via the command line, if any.
        env: Mapping of environment variables available to the process.

    Returns:
        The selected settings file path or ``None`` if no explicit path is
        provided.
    """

    if cli_path:
        return cli_path
    env_value = env.get(SETTINGS_FILE_ENV)
    if env_value:
        return Path(env_value).expanduser()
    return None


class _LayeredSettings:
    """Loading logic shared by the per-command settings dataclasses.

    Subclasses declare ``_SECTION`` (their settings file table), ``_ENV_KEYS``
    and ``_FIELD_CASTERS``, both keyed by dataclass field name.
    """

    _SECTION: ClassVar[str]
    _ENV_KEYS: ClassVar[Mapping[str, str]]
    _FIELD_CASTERS: ClassVar[Mapping[str, Any]]

    @classmethod
    def from_sources(
        cls,
        *,
        cli_overrides: Mapping[str, Any],
        env: Mapping[str, str],
        settings_file: Path | None,
    ):
        """Create a configuration instance from layered sources.

        Args:
            cli_overrides: Mapping of CLI-provided overrides keyed by dataclass
                field name. ``None`` values are ignored.
            env: Environment variables available to the process.
            settings_file: Path explicitly supplied to the CLI, or ``None``.

        Returns:
            An instance populated according to CLI > environment > settings >
            default precedence.

        Raises:
            FileNotFoundError: If *settings_file* (or the resolved environment
                path) points to a file that does not exist.
            ValueError: If the parsed file contains unsupported types or
                malformed structures.
        """

        settings_path = _resolve_settings_path(settings_file, env)
        data: dict[str, Any] = {}

        if settings_path:
            if not settings_path.exists():
                raise FileNotFoundError(f"Settings file '{settings_path}' does not exist")
            data.update(cls._load_settings_file(settings_path))

        data.update(cls._load_from_env(env))

        for key, value in cli_overrides.items():
            if value is not None:
                data[key] = value

        return cls(**data)

    @classmethod
    def _load_from_env(cls, env: Mapping[str, str]) -> dict[str, Any]:
        """Load supported configuration values from the environment.

        Only environment variables that are present and non-empty are included.
        """

        loaded: dict[str, Any] = {}
        for field_name, env_key in cls._ENV_KEYS.items():
            raw_value = env.get(env_key, "")
            if raw_value == "":
                continue
            loaded[field_name] = cls._FIELD_CASTERS[field_name](raw_value)
        return loaded

    @classmethod
    def _load_settings_file(cls, path: Path) -> dict[str, Any]:
        """Parse configuration values from a TOML or JSON settings file.

        Args:
            path: Filesystem path to a TOML or JSON document.

        Returns:
            Mapping of dataclass field names to parsed values. Keys that are
            not fields of this command are ignored.

        Raises:
            RuntimeError: If TOML parsing is requested on an interpreter without
                ``tomllib`` support.
            ValueError: If the document is not a mapping or contains unsupported
                types.
        """

        suffix = path.suffix.lower()
        if suffix == ".json":
            payload = json.loads(path.read_text())
        elif suffix == ".toml":
            if tomllib is None:  # pragma: no cover
                raise RuntimeError("tomllib is unavailable on this Python interpreter")
            payload = tomllib.loads(path.read_text())
        else:
            raise ValueError(
                f"Unsupported settings file extension '{path.suffix}'. "
                "Use .toml or .json."
            )

        if not isinstance(payload, Mapping):
            raise ValueError("Settings file must contain a top-level mapping")

        section = payload.get(cls._SECTION, payload)
        if not isinstance(section, Mapping):
            raise ValueError(f"Settings file '{cls._SECTION}' section must be a mapping")

        result: dict[str, Any] = {}
        for key, value in section.items():
            if key not in cls._FIELD_CASTERS:
                continue
            result[key] = cls._FIELD_CASTERS[key](value)
        return result


@dataclass(slots=True)
class CopySettings(_LayeredSettings):
    """Resolved configuration for the ``copy`` command."""

    interval_seconds: float = 1.0
    chunk_size: int = 64 * 1024
    print_summary: bool = True

    _SECTION: ClassVar[str] = "copy"
    _ENV_KEYS: ClassVar[Mapping[str, str]] = {
        "interval_seconds": "BYTERATE_COPY_INTERVAL_SECONDS",
        "chunk_size": "BYTERATE_COPY_CHUNK_SIZE",
        "print_summary": "BYTERATE_COPY_SUMMARY",
    }
    _FIELD_CASTERS: ClassVar[Mapping[str, Any]] = {
        "interval_seconds": float,
        "chunk_size": int,
        "print_summary": _to_bool,
    }


@dataclass(slots=True)
class BenchSettings(_LayeredSettings):
    """Resolved configuration for the ``bench`` command."""

    interval_seconds: float = 1.0
    chunk_size: int = 64 * 1024
    duration_seconds: float = 3.0
    print_summary: bool = True
    json_summary: bool = False

    _SECTION: ClassVar[str] = "bench"
    _ENV_KEYS: ClassVar[Mapping[str, str]] = {
        "interval_seconds": "BYTERATE_BENCH_INTERVAL_SECONDS",
        "chunk_size": "BYTERATE_BENCH_CHUNK_SIZE",
        "duration_seconds": "BYTERATE_BENCH_DURATION_SECONDS",
        "print_summary": "BYTERATE_BENCH_SUMMARY",
        "json_summary": "BYTERATE_BENCH_JSON_SUMMARY",
    }
    _FIELD_CASTERS: ClassVar[Mapping[str, Any]] = {
        "interval_seconds": float,
        "chunk_size": int,
        "duration_seconds": float,
        "print_summary": _to_bool,
        "json_summary": _to_bool,
    }


__all__ = ["BenchSettings", "CopySettings"]
