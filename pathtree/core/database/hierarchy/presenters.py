"""Presenter registry for tree reconstruction.

A presenter is any callable applied to each non-root node as the tree
builder attaches it to its parent; whatever it returns is what ends up in
the parent's ``children`` list. Presenters are passed to the builder as a
callable or by name. Names resolve, in order, through:

1. presenters registered on ``presenter_registry``
2. the ``TREE_PRESENTERS`` setting (name -> dotted import path)
3. the name itself taken as a dotted import path

Usage:
    from pathtree.core.database.hierarchy import presenter_registry

    @presenter_registry.register("summary")
    class CategorySummary:
        def __init__(self, node):
            self.node = node

    root = build_complete_tree(rows, transform="summary")
"""

from __future__ import annotations

import importlib
import logging
from typing import TYPE_CHECKING, Any, overload

from pathtree.core.database.hierarchy.exceptions import UnknownTransformError
from pathtree.core.settings import get_tree_settings

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

type Presenter = Callable[[Any], Any]


class PresenterRegistry:
    """Registry mapping presenter names to callables.

    Registration is expected during startup; lookups are read-only.
    """

    def __init__(self) -> None:
        """Initialize empty registry."""
        self._presenters: dict[str, Presenter] = {}

    @overload
    def register(self, name: str) -> Callable[[Presenter], Presenter]: ...

    @overload
    def register(self, name: str, presenter: Presenter) -> Presenter: ...

    def register(self, name: str, presenter: Presenter | None = None) -> Any:
        """Register a presenter under ``name``.

        Can be used as a decorator or direct method call.

        Example:
            presenter_registry.register("summary", CategorySummary)

            @presenter_registry.register("summary")
            class CategorySummary: ...

        Raises:
            ValueError: If ``name`` is already bound to a different presenter
        """

        def _register(func: Presenter) -> Presenter:
            existing = self._presenters.get(name)
            if existing is not None and existing is not func:
                raise ValueError(f"Presenter {name!r} already registered with {existing!r}")
            self._presenters[name] = func
            logger.debug("Registered presenter", extra={"presenter": name})
            return func

        if presenter is None:
            return _register
        return _register(presenter)

    def unregister(self, name: str) -> None:
        """Remove a presenter; unknown names are ignored."""
        self._presenters.pop(name, None)

    def names(self) -> list[str]:
        """Registered presenter names, sorted."""
        return sorted(self._presenters)

    def __contains__(self, name: object) -> bool:
        return name in self._presenters

    def resolve(self, transform: str | Presenter | None) -> Presenter | None:
        """Turn a presenter reference into a callable.

        Args:
            transform: None, a callable, a registered name, a name from
                settings, or a dotted import path

        Returns:
            The presenter callable, or None when ``transform`` is None

        Raises:
            UnknownTransformError: If the reference cannot be resolved to a callable
        """
        if transform is None:
            return None
        if callable(transform):
            return transform
        if not isinstance(transform, str) or not transform:
            raise UnknownTransformError(transform, "expected a callable or a presenter name")

        if transform in self._presenters:
            return self._presenters[transform]

        dotted = get_tree_settings().presenters.get(transform, transform)
        return self._import_presenter(transform, dotted)

    @staticmethod
    def _import_presenter(name: str, dotted: str) -> Presenter:
        """Import ``package.module.attr`` (or ``package.module:attr``)."""
        module_path, sep, attr = dotted.replace(":", ".").rpartition(".")
        if not sep or not module_path:
            raise UnknownTransformError(name, "not registered and not a dotted import path")
        try:
            module = importlib.import_module(module_path)
        except ImportError as exc:
            raise UnknownTransformError(name, f"cannot import {module_path!r}") from exc

        presenter = getattr(module, attr, None)
        if presenter is None or not callable(presenter):
            raise UnknownTransformError(name, f"{dotted!r} is not a callable")
        return presenter


presenter_registry = PresenterRegistry()


__all__ = [
    "Presenter",
    "PresenterRegistry",
    "presenter_registry",
]
