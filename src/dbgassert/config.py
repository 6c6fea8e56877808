from __future__ import annotations

import copy
import json
import logging
import os
from collections.abc import Mapping, MutableMapping
from contextlib import contextmanager
from contextvars import ContextVar
from functools import cache
from typing import Any, Final, TypeAlias, TypedDict, cast

from typing_extensions import Self, assert_never
from typing_extensions import override as override_

log = logging.getLogger(__name__)

CONFIG_ENV_KEY: Final = "DBGASSERT_CONFIG"
DEBUG_ENV_KEY: Final = "DBGASSERT_DEBUG"
TYPECHECK_ENV_KEY: Final = "DBGASSERT_TYPECHECK"


class BaseConfig(TypedDict, total=False):
    """Base configuration dictionary that all feature configs inherit from."""

    pass


class DebugConfig(BaseConfig, total=False):
    """Configuration for the debug feature."""

    enabled: bool


class TypecheckConfig(BaseConfig, total=False):
    """Configuration for runtime argument type checking."""

    enabled: bool


class Config(BaseConfig, total=False):
    """Root configuration containing all feature configurations."""

    debug: DebugConfig
    typecheck: TypecheckConfig


_SENTINEL: Final = object()
ROOT_PATH: Final = ""
_FEATURES: Final = ("debug", "typecheck")

ValueType: TypeAlias = Config | DebugConfig | TypecheckConfig | bool | None


def _parse_env_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _parse_env_config(env_key: str) -> Config:
    """
    Parse the root configuration from an environment variable.

    Supports:
    1. JSON: DBGASSERT_CONFIG='{"debug": {"enabled": true}, "typecheck": {"enabled": false}}'
    2. Comma-separated: DBGASSERT_CONFIG='debug=true,typecheck=false'
    """
    env_value = os.environ.get(env_key, "").strip()
    if not env_value:
        return {}

    # Callers mutate the result; the cached dict must stay intact.
    return copy.deepcopy(_parse_config_value(env_key, env_value))


@cache
def _parse_config_value(env_key: str, env_value: str) -> Config:
    """Parse one raw config value. Cached, so each distinct value warns once."""
    config: Config = {}

    if env_value.startswith("{"):
        try:
            parsed = json.loads(env_value)
        except json.JSONDecodeError as e:
            log.warning(f"Ignoring malformed JSON in {env_key}: {e}")
            return config

        if not isinstance(parsed, dict):
            log.warning(f"Ignoring {env_key}: expected a JSON object")
            return config
        return cast(Config, parsed)

    for pair in env_value.split(","):
        key, sep, value = pair.partition("=")
        if not sep:
            continue

        key = key.strip()
        if key not in _FEATURES:
            log.debug(f"Ignoring unknown key {key!r} in {env_key}")
            continue

        config.setdefault(key, {})["enabled"] = _parse_env_bool(value)

    return config


def _default_config() -> Config:
    """Build the root configuration from the environment."""
    config = _parse_env_config(CONFIG_ENV_KEY)

    if (debug_env := os.environ.get(DEBUG_ENV_KEY)) is not None:
        config.setdefault("debug", {})["enabled"] = _parse_env_bool(debug_env)

    if (typecheck_env := os.environ.get(TYPECHECK_ENV_KEY)) is not None:
        config.setdefault("typecheck", {})["enabled"] = _parse_env_bool(
            typecheck_env
        )

    return config


def _config_for_value(value: ValueType, feature: str) -> BaseConfig | object:
    """Convert a value to either a config dict or _SENTINEL."""
    match value:
        case None:
            return _SENTINEL
        case bool():
            if feature == "debug":
                return DebugConfig(enabled=value)
            elif feature == "typecheck":
                return TypecheckConfig(enabled=value)
            return {"enabled": value}
        case Mapping():
            return value
        case _:
            assert_never(value)


class _ConfigNode:
    """
    A node in the configuration tree.

    Each node owns one dotted path ("", "debug", "typecheck", ...) and a
    ContextVar holding its explicit value. Nodes without a value inherit
    their section of the parent's configuration.
    """

    __slots__ = ("_path", "_parent", "_var", "_feature")
    _registry: MutableMapping[str, Self] = {}

    @classmethod
    def node(cls, path: str) -> Self:
        """Create or fetch the node for path."""
        if path in cls._registry:
            return cls._registry[path]

        if not path:
            parent = None
        else:
            parent_path, _, _ = path.rpartition(".")
            parent = cls.node(parent_path)

        self = super().__new__(cls)
        self._init(path, parent)
        cls._registry[path] = self
        return self

    def _init(self, path: str, parent: _ConfigNode | None) -> None:
        self._path = path
        self._parent = parent
        self._feature = path.split(".")[0] if path else ""
        self._var: ContextVar[BaseConfig | object] = ContextVar(
            f"dbgassert:{path or '<root>'}", default=_SENTINEL
        )

    def _config(self) -> BaseConfig:
        val = self._var.get()
        if val is not _SENTINEL:
            return cast(BaseConfig, val)

        # The root is re-read from the environment on every access.
        if self._parent is None:
            return _default_config()

        # The parent config is already narrowed to its own section.
        parent_config: Any = self._parent._config()
        _, _, name = self._path.rpartition(".")
        section = parent_config.get(name) if isinstance(parent_config, dict) else None
        return cast(BaseConfig, section) if isinstance(section, dict) else {}

    @property
    def config(self) -> BaseConfig:
        """Return the effective configuration for this node."""
        return self._config()

    def __bool__(self) -> bool:
        return bool(self.config.get("enabled", False))

    def enabled(self) -> bool:
        """Return effective enabled flag."""
        return bool(self)

    def set(self, value: ValueType) -> None:
        """Set value. None means inherit parent again."""
        self._var.set(_config_for_value(value, self._feature))

    @contextmanager
    def override(self, value: ValueType):
        """Temporarily override value within current context."""
        token = self._var.set(_config_for_value(value, self._feature))
        try:
            yield
        finally:
            self._var.reset(token)

    @override_
    def __repr__(self) -> str:
        return f"<ConfigNode {self._path!r} enabled={bool(self)}>"


def node(path: str = ROOT_PATH) -> _ConfigNode:
    """Return the (singleton) node object for path."""
    return _ConfigNode.node(path)


def config(path: str = ROOT_PATH) -> BaseConfig:
    """Return the effective configuration for path."""
    return node(path).config


def enabled(path: str = ROOT_PATH) -> bool:
    return bool(node(path))


@contextmanager
def override(value: ValueType, path: str = ROOT_PATH):
    """Temporarily override path within the current context."""
    with node(path).override(value):
        yield


def set(value: ValueType, path: str = ROOT_PATH) -> None:
    node(path).set(value)


def debug_enabled() -> bool:
    return enabled("debug")


def typecheck_enabled() -> bool:
    """
    Check if argument type checking is enabled.

    An explicit typecheck setting wins. Otherwise typecheck follows the
    debug feature, and is off when neither is set.
    """
    typecheck_config = config("typecheck")
    if "enabled" in typecheck_config:
        return bool(typecheck_config["enabled"])

    return debug_enabled()


@contextmanager
def debug_override(value: bool | DebugConfig | None):
    with override(value, "debug"):
        yield


@contextmanager
def typecheck_override(value: bool | TypecheckConfig | None):
    with override(value, "typecheck"):
        yield
