"""Route registration scopes for module route files."""

from __future__ import annotations

import importlib.machinery
import importlib.util
import sys
from typing import TYPE_CHECKING, Any

import structlog
from litestar import Router

if TYPE_CHECKING:
    from collections.abc import Callable

    from litestar.types import ControllerRouterHandler

    from modular.lib.classloader import ClassLoader

__all__ = ("ControllerReference", "RouteGroup", "RouteRegistrar")

logger = structlog.get_logger()


class ControllerReference:
    """A controller registered by name and resolved when routers are built.

    Route files may run before the module's controllers are mapped, so the
    class is only looked up in :meth:`resolve`.
    """

    __slots__ = ("_class_loader", "identifier")

    def __init__(self, identifier: str, class_loader: ClassLoader | None = None) -> None:
        self.identifier = identifier
        self._class_loader = class_loader

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.identifier!r})"

    def resolve(self) -> Any:
        """Load the controller class.

        Raises:
            ImportError: If no controller is registered under the identifier.

        Returns:
            The controller class.
        """
        resolved = self._class_loader.resolve(self.identifier) if self._class_loader is not None else None
        if resolved is None:
            msg = f"Controller {self.identifier} is not registered"
            raise ImportError(msg, name=self.identifier)
        return resolved


class RouteGroup:
    """Registration context handed to route files as the ``router`` global.

    A route file registers its handlers with :meth:`register`. Controllers
    from the same module are referenced relative to :attr:`namespace` with
    :meth:`controller`.
    """

    def __init__(self, namespace: str, class_loader: ClassLoader | None = None, path: str = "/") -> None:
        self.namespace = namespace
        self.path = path
        self.handlers: list[ControllerRouterHandler | ControllerReference] = []
        self._class_loader = class_loader

    def register(self, *handlers: ControllerRouterHandler | ControllerReference) -> None:
        self.handlers.extend(handlers)

    def controller(self, name: str) -> ControllerReference:
        """Reference a controller registered under this group's namespace.

        Args:
            name: The controller name, e.g. ``"PostController"``.

        Returns:
            A reference resolved when the group is turned into a router.
        """
        separator = self._class_loader.separator if self._class_loader is not None else "."
        return ControllerReference(f"{self.namespace}{separator}{name}", self._class_loader)

    def resolved_handlers(self) -> list[ControllerRouterHandler]:
        """Registered handlers with controller references replaced by their classes."""
        return [
            handler.resolve() if isinstance(handler, ControllerReference) else handler for handler in self.handlers
        ]

    def to_router(self) -> Router:
        return Router(path=self.path, route_handlers=self.resolved_handlers())


class RouteRegistrar:
    """Collects route groups opened by module route files."""

    def __init__(self, class_loader: ClassLoader | None = None) -> None:
        self.groups: list[RouteGroup] = []
        self._class_loader = class_loader
        self._included: set[str] = set()

    def group(self, namespace: str, callback: Callable[[RouteGroup], None]) -> RouteGroup:
        """Open a routing scope and run ``callback`` inside it.

        Args:
            namespace: The controllers namespace bound to the scope.
            callback: Receives the scope once it is established.

        Returns:
            The route group.
        """
        group = RouteGroup(namespace, self._class_loader)
        self.groups.append(group)
        callback(group)
        return group

    def include(self, group: RouteGroup, path: str, name: str) -> bool:
        """Import a route file as module ``name`` with ``group`` bound as ``router``.

        The module stays in :data:`sys.modules` so handlers defined in the
        file can have their annotations resolved. Each path runs at most once
        per registrar.

        Args:
            group: The scope route file handlers register with.
            path: The route file.
            name: The module name the file is imported under.

        Raises:
            ImportError: If the route file cannot be loaded.

        Returns:
            ``True`` when the file ran, ``False`` when it had already been included.
        """
        if path in self._included:
            return False

        loader = importlib.machinery.SourceFileLoader(name, path)
        spec = importlib.util.spec_from_file_location(name, path, loader=loader)
        if spec is None:
            msg = f"No loader available for {path}"
            raise ImportError(msg, name=name, path=path)
        module = importlib.util.module_from_spec(spec)
        module.router = group  # type: ignore[attr-defined]
        sys.modules[name] = module
        try:
            loader.exec_module(module)
        except BaseException:
            del sys.modules[name]
            raise
        self._included.add(path)
        logger.debug("Included route file", path=path, module=name, namespace=group.namespace)
        return True

    @property
    def route_handlers(self) -> list[ControllerRouterHandler]:
        return [handler for group in self.groups for handler in group.resolved_handlers()]

    def routers(self) -> list[Router]:
        """One :class:`~litestar.Router` per group that registered handlers."""
        return [group.to_router() for group in self.groups if group.handlers]
