"""
Configuration loading for starguard (.starguard.yaml).

The file is looked up in the working directory first, then in the
user's home directory.
"""

from pathlib import Path
from typing import Any, List, Optional, Union

import yaml

from models import DEFAULT_TIMEOUT, Configuration, RepositoryException


CONFIG_FILE = ".starguard.yaml"


class ConfigError(RuntimeError):
    """Raised when the configuration file is missing or invalid."""


def find_config(
    config_file: str = CONFIG_FILE,
    cwd: Optional[Path] = None,
    home: Optional[Path] = None,
) -> Path:
    """
    Locate the configuration file.

    Args:
        config_file: File name (or path) to look for
        cwd: Working directory (defaults to Path.cwd())
        home: Home directory (defaults to Path.home())

    Returns:
        Path to an existing config file
    """
    cwd = cwd or Path.cwd()
    candidates = [cwd / config_file]

    try:
        home = home or Path.home()
    except RuntimeError as e:
        raise ConfigError(f"unable to find home directory, {e}") from e
    candidates.append(home / config_file)

    for candidate in candidates:
        if candidate.is_file():
            return candidate

    searched = " ".join(str(c) for c in candidates)
    raise ConfigError(f"could not find config file: {searched}")


def load_config(config_path: Union[str, Path]) -> Configuration:
    """
    Load configuration from disk.

    Args:
        config_path: Path to the YAML file

    Returns:
        Configuration
    """
    try:
        text = Path(config_path).read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"could not read config file: {e}") from e

    return parse_config(text)


def parse_config(text: str) -> Configuration:
    """
    Parse YAML text into a Configuration.

    Args:
        text: YAML document

    Returns:
        Configuration
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"could not parse config file: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("config file must contain a mapping at the root")

    warn = _as_threshold(data.get("warn", 0), "warn")
    error = _as_threshold(data.get("error", 0), "error")
    if error > warn:
        raise ConfigError(
            f"error threshold ({error}) must not be greater than warn threshold ({warn})"
        )

    timeout = data.get("timeout", DEFAULT_TIMEOUT)
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        raise ConfigError(f"timeout must be a positive number, got {timeout!r}")

    # "exeptions" is the spelling older config files use
    raw_exceptions = data.get("exceptions", data.get("exeptions"))

    return Configuration(
        warn=warn,
        error=error,
        exceptions=tuple(_as_exceptions(raw_exceptions)),
        timeout=timeout,
    )


def _as_threshold(value: Any, key: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{key} must be an integer, got {value!r}")
    if value < 0:
        raise ConfigError(f"{key} must not be negative, got {value}")
    return value


def _as_exceptions(value: Any) -> List[RepositoryException]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigError("exceptions must be a list")

    exceptions = []
    for item in value:
        if not isinstance(item, dict) or not isinstance(item.get("repository"), str):
            raise ConfigError(f"invalid exception entry: {item!r}")
        exceptions.append(RepositoryException(
            repository=item["repository"],
            reason=str(item.get("reason") or ""),
        ))
    return exceptions
