"""Application core: the place services are registered and looked up.

Only one capability is registered today, ``config``. Components that need the
settings service receive a :class:`ServiceRuntime` (or the :class:`Core`) and
look the service up by reference instead of constructing their own.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Optional, Protocol, Type, TypeVar, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class ConfigService(Protocol):
    """What the rest of the application needs from the settings service."""

    def save(self) -> None: ...

    def get(self, key: str, expected_type: Optional[Type[Any]] = None) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...

    def save_struct(self, name: str, value: Any) -> None: ...

    def load_struct(self, name: str, out: Any) -> Any: ...


class Core:
    """Process-wide service registry.

    Set once at startup, read thereafter. There is no locking: registration is
    expected to happen before other threads start.
    """

    def __init__(self) -> None:
        self._config: Optional[ConfigService] = None

    @property
    def config(self) -> Optional[ConfigService]:
        return self._config

    def set_config(self, service: ConfigService) -> None:
        self._config = service


@dataclass
class ServiceRuntime(Generic[T]):
    """Back-reference from a registered service to its core and options."""

    core: Core
    options: T

    @property
    def config(self) -> Optional[ConfigService]:
        return self.core.config
