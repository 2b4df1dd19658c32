"""Configuration loading and typed lookups shared by the generator and CLI."""

from __future__ import annotations

import copy
import logging
import os
from pathlib import Path
from typing import Any, Callable, Mapping, TypeVar

import yaml

from .errors import ConfigFileError

__all__ = [
    "CONFIG_ENV_VAR",
    "CONFIG_FILENAME",
    "ConfigResolver",
    "DEFAULT_CONFIG_PATH",
    "deep_merge",
    "find_config_file",
    "load_config",
]

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

CONFIG_FILENAME = "pkgforge.yaml"
CONFIG_ENV_VAR = "PKGFORGE_CONFIG"
DEFAULT_CONFIG_PATH = Path(__file__).parent / "resources" / "config.yaml"


def _is_string(value: Any) -> bool:
    return isinstance(value, str)


def _is_bool(value: Any) -> bool:
    return isinstance(value, bool)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_list(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _is_mapping(value: Any) -> bool:
    return isinstance(value, Mapping)


class ConfigResolver:
    """Read-only view over a nested configuration mapping.

    Values are addressed with dotted paths such as ``"defaults.author.name"``.
    Lookups never raise: a missing segment, a non-mapping intermediate value
    or a value rejected by the type guard all yield the supplied default.
    """

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = copy.deepcopy(dict(data or {}))

    def get(self, key: str, default: T, guard: Callable[[Any], bool]) -> T:
        value: Any = self._data
        for segment in key.split("."):
            if not isinstance(value, Mapping) or segment not in value:
                return default
            value = value[segment]
        return value if guard(value) else default

    def get_string(self, key: str, default: str | None = None) -> str | None:
        return self.get(key, default, _is_string)

    def get_bool(self, key: str, default: bool = False) -> bool:
        return self.get(key, default, _is_bool)

    def get_int(self, key: str, default: int = 0) -> int:
        return self.get(key, default, _is_int)

    def get_list(self, key: str, default: list[Any] | None = None) -> list[Any]:
        value = self.get(key, None, _is_list)
        if value is None:
            return list(default or [])
        return list(value)

    def get_mapping(self, key: str, default: Mapping[str, Any] | None = None) -> dict[str, Any]:
        value = self.get(key, None, _is_mapping)
        if value is None:
            return dict(default or {})
        return copy.deepcopy(dict(value))

    def as_dict(self) -> dict[str, Any]:
        """Return a deep copy of the underlying configuration."""

        return copy.deepcopy(self._data)


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Merge ``override`` into a copy of ``base``.

    Nested mappings are merged recursively; any other value in ``override``
    replaces the value in ``base``.
    """

    merged = copy.deepcopy(dict(base))
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigFileError(f"cannot read configuration file {path}: {exc}") from exc

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise ConfigFileError(f"invalid YAML in {path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigFileError(f"configuration file {path} must contain a mapping at the top level")
    return data


def find_config_file(
    explicit: str | Path | None = None,
    *,
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> Path | None:
    """Locate the user configuration file.

    The explicit path wins, then ``$PKGFORGE_CONFIG``, then ``pkgforge.yaml``
    in ``cwd``. Explicit and environment paths must exist; the working
    directory file is optional.
    """

    environment = os.environ if env is None else env
    for candidate, source in ((explicit, "--config-file"), (environment.get(CONFIG_ENV_VAR), CONFIG_ENV_VAR)):
        if candidate:
            path = Path(candidate).expanduser()
            if not path.is_file():
                raise ConfigFileError(f"configuration file given by {source} not found: {path}")
            return path

    local = (cwd or Path.cwd()) / CONFIG_FILENAME
    if local.is_file():
        return local
    return None


def load_config(
    path: str | Path | None = None,
    *,
    defaults_path: Path = DEFAULT_CONFIG_PATH,
) -> ConfigResolver:
    """Load the bundled defaults and merge the user file at ``path`` over them."""

    data = _read_yaml(defaults_path)
    if path is not None:
        LOGGER.debug("Loading configuration from %s", path)
        data = deep_merge(data, _read_yaml(Path(path)))
    return ConfigResolver(data)
