"""Registry of the enum types declared by an application.

An application builds one EnumRegistry at startup, declares its enums
through it and keeps the handle for bulk refreshes: after test fixtures
reload the tables (reinitialize_all) or after modules are reloaded
(reresolve_all).

All operations hold one reentrant lock for their whole duration, so a bulk
refresh is never observed half done.
"""

from __future__ import annotations

import importlib
import threading
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import structlog

from persistent_enum.core.errors import UnresolvableTypeError
from persistent_enum.db.database import Database
from persistent_enum.enum.acts_as_enum import (
    acts_as_enum,
    discard_enum,
    reinitialize_acts_as_enum,
)

if TYPE_CHECKING:
    from persistent_enum.config.models import PersistentEnumConfig
    from persistent_enum.enum.builder import MemberBuilder, MemberDeclaration
    from persistent_enum.enum.state import EnumState

logger = structlog.get_logger()

Resolver = Callable[[str], Any]


def type_name(model: type) -> str:
    """Registry key for ``model``: ``module:QualName``."""
    return f"{model.__module__}:{model.__qualname__}"


def resolve_type_name(name: str) -> Any:
    """Import the object a ``module:QualName`` key refers to."""
    module_name, _, qualname = name.partition(":")
    try:
        obj: Any = importlib.import_module(module_name)
        for part in qualname.split("."):
            obj = getattr(obj, part)
    except (ImportError, AttributeError) as e:
        raise UnresolvableTypeError.after_reload(name) from e
    return obj


class EnumRegistry:
    """Tracks every declared enum type by name.

    Args:
        db: Default database for declare()
        name_attr: Default name column for declare()
    """

    def __init__(self, db: Database | None = None, *, name_attr: str = "name") -> None:
        self.db = db
        self.name_attr = name_attr
        self._lock = threading.RLock()
        self._types: dict[str, type] = {}

    @classmethod
    def from_config(cls, config: PersistentEnumConfig) -> EnumRegistry:
        return cls(Database.from_config(config.database), name_attr=config.enums.name_attr)

    def declare(
        self,
        model: type,
        required: MemberDeclaration | MemberBuilder | None = (),
        *,
        builder: MemberBuilder | None = None,
        name_attr: str | None = None,
        sql_enum_type: str | None = None,
        db: Database | None = None,
    ) -> EnumState:
        """acts_as_enum() with this registry's defaults."""
        database = db or self.db
        if database is None:
            raise ValueError("EnumRegistry.declare() needs a database: pass db= or set one")
        with self._lock:
            return acts_as_enum(
                model,
                required,
                db=database,
                registry=self,
                name_attr=name_attr or self.name_attr,
                sql_enum_type=sql_enum_type,
                builder=builder,
            )

    def register(self, model: type) -> None:
        with self._lock:
            self._types[type_name(model)] = model

    def discard(self, model: type) -> None:
        """Forget ``model`` and unbind its enum state."""
        with self._lock:
            self._types.pop(type_name(model), None)
            discard_enum(model)

    def reinitialize_all(self) -> dict[str, EnumState]:
        """Reload every registered enum from the database.

        Useful when table contents may have changed out of band, e.g.
        after fixture loading.
        """
        with self._lock:
            logger.info("enum_registry_reinitialize", count=len(self._types))
            return {
                name: reinitialize_acts_as_enum(model) for name, model in self._types.items()
            }

    def reresolve_all(self, resolver: Resolver | None = None) -> None:
        """Re-resolve every registered name to a live class and re-register it.

        Raises:
            UnresolvableTypeError: A name no longer resolves to a class
        """
        resolve = resolver or resolve_type_name
        with self._lock:
            for name in list(self._types):
                resolved = resolve(name)
                if not isinstance(resolved, type):
                    raise UnresolvableTypeError.after_reload(name)
                self._types[name] = resolved
                logger.debug("enum_type_reresolved", type_name=name)

    def names(self) -> list[str]:
        with self._lock:
            return list(self._types)

    def types(self) -> list[type]:
        with self._lock:
            return list(self._types.values())

    def close(self) -> None:
        """Dispose of the registry's database engine, if it owns one."""
        if self.db is not None:
            self.db.dispose()

    def __contains__(self, model: object) -> bool:
        if not isinstance(model, type):
            return False
        with self._lock:
            return self._types.get(type_name(model)) is model

    def __len__(self) -> int:
        with self._lock:
            return len(self._types)
