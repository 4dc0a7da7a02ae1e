"""Feature flags read from a TOML or JSON section.

```toml
[FeatureFlags.TwoWayMessaging]
IsEnabled = true

[FeatureFlags.IncomeSupport]
IsEnabled = "true"
MaxPages = "8"

[FeatureFlags.IncomeSupport.Page8]
IsEnabled = false
```

`FeatureManager.read(Path("features.toml"))["IncomeSupport.Page8"].is_enabled`
"""

from __future__ import annotations
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Protocol, Type, TypeVar

from .errors import ConfigError, InputError
from .fallible import Fallible
from .logging import logger
from .utility import convert, read_from_file


log = logger("flags")

T = TypeVar("T")

IS_ENABLED = "IsEnabled"
DEFAULT_SECTION = "FeatureFlags"


class Config(Protocol):
    @property
    def is_enabled(self) -> bool: ...

    def get(self, key: str, dtype: Type[T] = ...) -> T: ...


@dataclass(frozen=True)
class FeatureEntry:
    path: str
    section: Mapping[str, Any]

    @property
    def is_enabled(self) -> bool:
        return self.get(IS_ENABLED, bool)

    def get(self, key: str, dtype: Type[T] = str) -> T:  # type: ignore[assignment]
        if key not in self.section or isinstance(self.section[key], Mapping):
            raise ConfigError(self.path, f"does not contain the entry `{key}`.")
        value = self.section[key]
        try:
            return convert(dtype, value)
        except InputError as e:
            raise ConfigError(
                f"{self.path}.{key}",
                f"value `{value!r}` cannot be converted to type `{getattr(dtype, '__name__', dtype)}`.",
            ) from e

    def features(self) -> Iterator[str]:
        """Names of the nested features of this entry."""
        return (k for k, v in self.section.items() if isinstance(v, Mapping))


@dataclass
class FeatureManager:
    root: Mapping[str, Any]
    name: str = DEFAULT_SECTION

    @staticmethod
    def read(path: Path, section: Optional[str] = DEFAULT_SECTION) -> FeatureManager:
        data = read_from_file(path, section)
        if not isinstance(data, Mapping):
            raise ConfigError(str(path), f"section `{section}` should be a table.")
        return FeatureManager(data, section or str(path))

    def __getitem__(self, key: str) -> FeatureEntry:
        section: Any = self.root
        for item in key.split("."):
            if not isinstance(section, Mapping) or not isinstance(section.get(item), Mapping):
                raise ConfigError(self.name, f"does not contain the section `{key}`.")
            section = section[item]
        log.debug("feature `%s` looked up in `%s`", key, self.name)
        return FeatureEntry(f"{self.name}.{key}", section)

    def lookup(self, key: str) -> Fallible[Config, ConfigError]:
        try:
            return Fallible.wrap_value(self[key])
        except ConfigError as e:
            return Fallible.wrap_error(e)

    def __contains__(self, key: str) -> bool:
        try:
            self[key]
        except ConfigError:
            return False
        return True

    def walk(self, prefix: str = "") -> Iterator[str]:
        """All feature keys, depth first, in dotted notation."""
        section = self[prefix].section if prefix else self.root
        for name, sub in section.items():
            if isinstance(sub, Mapping):
                key = f"{prefix}.{name}" if prefix else name
                yield key
                yield from self.walk(key)

    def enabled(self) -> list[str]:
        """Keys of all features that are switched on. A nested feature only
        counts when its parents are switched on too."""
        result = []
        for key in self.walk():
            parts = key.split(".")
            parents = [".".join(parts[:i]) for i in range(1, len(parts) + 1)]
            if all(self._enabled_or_false(p) for p in parents):
                result.append(key)
        return result

    def _enabled_or_false(self, key: str) -> bool:
        entry = self[key]
        if IS_ENABLED not in entry.section:
            return False
        return entry.is_enabled
