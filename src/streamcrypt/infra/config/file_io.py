from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any

from streamcrypt.infra.paths import DEFAULT_CONFIG_FILE, SETTING_PATH

logger = logging.getLogger(__name__)

LOCAL_FILENAMES = ["settings.toml", "settings.json"]


def _resolve_file_path(
    user_path: str | Path | None,
    local_filename: list[str],
    fallback_path: Path,
) -> Path | None:
    """
    Pick the configuration file to load.

    An explicit `user_path` that does not exist ends the lookup. Otherwise the
    working directory is searched for `local_filename`, then `fallback_path`.

    Args:
        user_path: Optional file path explicitly provided by the user.
        local_filename: File names to check in the current working directory.
        fallback_path: Per-user settings file.

    Returns:
        The resolved path, or None if nothing was found.
    """
    if user_path:
        path = Path(user_path).expanduser().resolve()
        if path.is_file():
            return path
        logger.warning("Specified config file not found: %s", path)
        return None

    for name in local_filename:
        local_path = (Path.cwd() / name).resolve()
        if local_path.is_file():
            logger.debug("Using local config file: %s", local_path)
            return local_path

    if fallback_path.is_file():
        return fallback_path.resolve()

    return None


def _load_by_extension(path: Path) -> dict[str, Any]:
    """
    Parse a `.toml` or `.json` configuration file.

    Args:
        path: Path to the configuration file.

    Returns:
        Parsed configuration data as a dictionary.

    Raises:
        ValueError: If the extension is unsupported, parsing fails, or the
            root element is not a table/object.
    """
    ext = path.suffix.lower()

    if ext == ".json":
        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e

    elif ext == ".toml":
        try:
            with path.open("rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ValueError(f"Invalid TOML in {path}: {e}") from e

    else:
        raise ValueError(f"Unsupported config file extension: {ext}")

    if not isinstance(data, dict):
        raise ValueError(f"Config root must be a dict, got {type(data)} in {path}")

    return data


def load_config(config_path: str | Path | None = None) -> dict[str, Any]:
    """
    Load configuration data from a TOML or JSON file.

    Resolution order:
        - Explicit `config_path` (if provided)
        - `settings.toml` or `settings.json` in the working directory
        - `SETTING_PATH` fallback path

    Args:
        config_path: Optional explicit configuration file path.

    Returns:
        Parsed configuration as a dictionary.

    Raises:
        FileNotFoundError: If no valid configuration file is found.
        ValueError: If the file cannot be parsed or contains invalid structure.
    """
    path = _resolve_file_path(
        user_path=config_path,
        local_filename=LOCAL_FILENAMES,
        fallback_path=SETTING_PATH,
    )

    if not path:
        raise FileNotFoundError("No valid config file found.")

    logger.debug("Loading configuration from: %s", path)
    return _load_by_extension(path)


def load_config_or_default(config_path: str | Path | None = None) -> dict[str, Any]:
    """
    Like :func:`load_config`, but an absent implicit config yields ``{}``.

    A missing *explicit* `config_path` is still an error.

    Raises:
        FileNotFoundError: If `config_path` was given but does not exist.
        ValueError: If the file cannot be parsed.
    """
    try:
        return load_config(config_path)
    except FileNotFoundError:
        if config_path:
            raise
        logger.debug("No config file found, using built-in defaults")
        return {}


def copy_default_config(target: Path) -> None:
    """
    Copy the bundled sample config to the given target path.

    Args:
        target: Destination path for the copied default configuration.
    """
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(DEFAULT_CONFIG_FILE.read_bytes())
    logger.info("Default configuration written to: %s", target)


def save_config(
    config: dict[str, Any],
    output_path: str | Path | None = None,
) -> None:
    """
    Save configuration data to disk in JSON format.

    Args:
        config: Parsed configuration dictionary.
        output_path: Destination path for the JSON file. Defaults to the
            per-user `SETTING_PATH`.

    Raises:
        OSError: If writing to disk fails.
    """
    output = Path(output_path or SETTING_PATH).expanduser().resolve()
    output.parent.mkdir(parents=True, exist_ok=True)

    try:
        with output.open("w", encoding="utf-8") as f:
            json.dump(config, f, indent=2, ensure_ascii=False)
    except OSError as e:
        logger.error("Failed to write config JSON '%s': %s", output, e)
        raise

    logger.info("Configuration saved to JSON: %s", output)


def save_config_file(
    source_path: str | Path, output_path: str | Path | None = None
) -> None:
    """
    Load a TOML/JSON configuration file and install it as the per-user JSON.

    Args:
        source_path: Path to the source TOML/JSON file.
        output_path: Path to the output JSON file. Defaults to `SETTING_PATH`.

    Raises:
        FileNotFoundError: If the source file does not exist.
        ValueError: If the source file is invalid or cannot be parsed.
    """
    source = Path(source_path).expanduser().resolve()
    if not source.is_file():
        raise FileNotFoundError(f"Source file not found: {source}")

    save_config(_load_by_extension(source), output_path)
