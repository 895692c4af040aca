"""Loading of the ``.toc.yaml`` configuration file."""

import pathlib

import yaml

from repotoc.constants import CONFIG_FILENAME
from repotoc.errors import ConfigError
from repotoc.models import Config


def _string_list(data: dict, key: str, path: pathlib.Path) -> list[str]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{path}: '{key}' must be a list of strings")
    return list(value)


def _string_map(data: dict, key: str, path: pathlib.Path) -> dict[str, str]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{path}: '{key}' must be a mapping")
    result = {}
    for name, description in value.items():
        if not isinstance(name, str) or not isinstance(description, str):
            raise ConfigError(f"{path}: '{key}' must map strings to strings")
        result[name] = description
    return result


def parse_config(text: str, path: pathlib.Path) -> Config:
    """Parse the YAML ``text`` of a configuration file.

    Args:
        text: File contents
        path: Where the text came from, used in error messages

    Returns:
        Parsed Config

    Raises:
        ConfigError: If the YAML is malformed or has the wrong shape
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"Could not parse {path}: {e}") from e

    if data is None:
        return Config()
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping at the top level")

    return Config(
        ignore=_string_list(data, "ignore", path),
        no_directory_contents=_string_list(data, "noDirectoryContents", path),
        descriptions=_string_map(data, "descriptions", path),
        default_descriptions=_string_map(data, "defaultDescriptions", path),
        show_first=_string_list(data, "showFirst", path),
    )


def load_config(directory: pathlib.Path) -> Config:
    """Read ``.toc.yaml`` from ``directory``; an absent file yields an empty Config."""
    config_path = directory / CONFIG_FILENAME
    if not config_path.is_file():
        return Config()
    try:
        text = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Could not read {config_path}: {e}") from e
    return parse_config(text, config_path)
