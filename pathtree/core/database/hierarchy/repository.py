"""Repository used by placement and cascade code to reach the store.

``TreeRepository`` covers the operations tree maintenance needs (save,
lookup by id, filtered fetch, filtered count and delete). It wraps SQLAlchemy failures in ``StoreFailureError``, and runs caller-supplied
lifecycle hooks after saves and deletes.

Example:
    repo = TreeRepository(Category)

    async def reindex(session, node):
        await search_index.update(node.id, node.path)

    repo.add_hook("post_save", reindex)
    await set_child_of(session, node, parent, repository=repo)
"""

from __future__ import annotations

import inspect
import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Literal

from sqlalchemy.exc import SQLAlchemyError

from pathtree.core.database.exceptions import StoreFailureError
from pathtree.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Iterable, Iterator, Mapping

    from sqlalchemy import Select
    from sqlalchemy.ext.asyncio import AsyncSession

HookEvent = Literal["post_save", "post_delete"]
HOOK_EVENTS: tuple[HookEvent, ...] = ("post_save", "post_delete")

type Hook = Callable[[AsyncSession, Any], Awaitable[None] | None]


class TreeRepository[T]:
    """Store collaborator for materialized-path models.

    Provides:
        - save(session, node) -> T (assigns id on first save)
        - find_one_by_id(session, id) -> T | None
        - find_where(session, statement) -> list[T]
        - count_where(session, statement) -> int
        - delete(session, node) -> None
        - add_hook(event, callback) for "post_save" / "post_delete"
    """

    __slots__ = ("_hooks", "_lazy", "_logger", "model")

    def __init__(
        self,
        model: type[T],
        *,
        hooks: Mapping[HookEvent, Iterable[Hook]] | None = None,
    ) -> None:
        """Initialize repository.

        Args:
            model: Tree model class
            hooks: Optional initial hooks keyed by event name
        """
        self.model = model
        # Standard logger for INFO/WARNING/ERROR
        self._logger = logging.getLogger(f"repository.{model.__name__}")
        # Lazy logger for DEBUG (zero overhead when DEBUG disabled)
        self._lazy = get_lazy_logger(f"repository.{model.__name__}")
        self._hooks: dict[HookEvent, list[Hook]] = {event: [] for event in HOOK_EVENTS}
        for event, callbacks in (hooks or {}).items():
            for callback in callbacks:
                self.add_hook(event, callback)

    def add_hook(self, event: HookEvent, callback: Hook) -> None:
        """Register a callback run after every save or delete.

        Callbacks receive ``(session, node)`` and may be coroutines.

        Raises:
            ValueError: If ``event`` is not a known lifecycle event
        """
        if event not in self._hooks:
            raise ValueError(f"Unknown hook event {event!r}; expected one of {HOOK_EVENTS}")
        self._hooks[event].append(callback)

    async def save(self, session: AsyncSession, node: T) -> T:
        """Insert or update ``node`` and flush so generated ids are assigned."""
        is_new = getattr(node, "id", None) is None
        with self._store_errors("db.save"):
            session.add(node)
            await session.flush()

        self._lazy.debug(
            lambda: f"db.save: {self.model.__name__}(id={node.id}, path={node.path!r}, "
            f"level={node.level}) {'inserted' if is_new else 'updated'}"
        )
        await self._fire("post_save", session, node)
        return node

    async def find_one_by_id(self, session: AsyncSession, id: Any) -> T | None:  # noqa: A002
        """Get node by primary key or None."""
        with self._store_errors("db.find_one_by_id"):
            instance = await session.get(self.model, id)

        self._lazy.debug(
            lambda: f"db.find_one_by_id: {self.model.__name__}({id}) -> "
            f"{'found' if instance else 'not found'}"
        )
        return instance

    async def find_where(self, session: AsyncSession, statement: Select[Any]) -> list[T]:
        """Execute a prepared statement and return the matching nodes in order."""
        with self._store_errors("db.find_where"):
            result = await session.execute(statement)
            items = list(result.scalars().all())

        self._lazy.debug(lambda: f"db.find_where: {self.model.__name__} -> {len(items)} rows")
        return items

    async def count_where(self, session: AsyncSession, statement: Select[Any]) -> int:
        """Execute a prepared COUNT statement."""
        with self._store_errors("db.count_where"):
            result = await session.execute(statement)
            return int(result.scalar_one())

    async def delete(self, session: AsyncSession, instance: T) -> None:
        """Delete ``instance``; descendants go with it through ON DELETE CASCADE."""
        with self._store_errors("db.delete"):
            await session.delete(instance)
            await session.flush()

        self._logger.info(
            "Entity deleted",
            extra={
                "entity": self.model.__name__,
                "id": str(getattr(instance, "id", None)),
                "operation": "db.delete",
            },
        )
        await self._fire("post_delete", session, instance)

    async def _fire(self, event: HookEvent, session: AsyncSession, node: T) -> None:
        for callback in self._hooks[event]:
            outcome = callback(session, node)
            if inspect.isawaitable(outcome):
                await outcome

    @contextmanager
    def _store_errors(self, operation: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            self._logger.warning(
                "Store operation failed",
                extra={
                    "entity": self.model.__name__,
                    "operation": operation,
                    "error": type(exc).__name__,
                },
            )
            raise StoreFailureError(operation, self.model.__name__, type(exc).__name__) from exc


__all__ = [
    "HOOK_EVENTS",
    "Hook",
    "HookEvent",
    "TreeRepository",
]
