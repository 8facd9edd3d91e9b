"""Mapper-level write guards for initialized enum types.

Once an enum state is bound to a type, inserts, updates and deletes of that
type's rows through the ORM raise ReadOnlyMemberError. The materializer
lifts the guard for its own inserts with ``allow_writes()``.

Frozen members held by an enum state are shared by every caller, so they
may not be attached to a session either: committing that session would
expire them. ``EnumMember.in_session()`` merges a session-local copy instead.

Core-level statements (``table.insert()``, raw SQL) do not fire mapper
events and are not guarded; such changes show up on the next
reinitialization.
"""

from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

from sqlalchemy import event
from sqlalchemy.orm import Session

from persistent_enum.core.errors import ReadOnlyMemberError
from persistent_enum.enum.state import is_frozen, state_of

_writes_allowed: ContextVar[bool] = ContextVar("persistent_enum_writes_allowed", default=False)


@contextmanager
def allow_writes() -> Generator[None, None, None]:
    token = _writes_allowed.set(True)
    try:
        yield
    finally:
        _writes_allowed.reset(token)


def _check(mapper: Any, operation: str) -> None:
    model = mapper.class_
    if _writes_allowed.get() or state_of(model) is None:
        return
    raise ReadOnlyMemberError.for_operation(model.__name__, operation)


def _before_insert(mapper: Any, _connection: Any, _target: Any) -> None:
    _check(mapper, "create")


def _before_update(mapper: Any, _connection: Any, _target: Any) -> None:
    _check(mapper, "update")


def _before_delete(mapper: Any, _connection: Any, _target: Any) -> None:
    _check(mapper, "destroy")


def _before_attach(_session: Any, instance: Any) -> None:
    if is_frozen(instance):
        raise ReadOnlyMemberError.for_attach(type(instance).__name__)


_GUARDS = (
    ("before_insert", _before_insert),
    ("before_update", _before_update),
    ("before_delete", _before_delete),
)


def install_write_guards(model: type) -> None:
    """Attach the guards to ``model`` and the member attach guard to all sessions.

    Safe to call repeatedly.
    """
    for identifier, listener in _GUARDS:
        if not event.contains(model, identifier, listener):
            event.listen(model, identifier, listener)
    if not event.contains(Session, "before_attach", _before_attach):
        event.listen(Session, "before_attach", _before_attach)
