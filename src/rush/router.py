"""Router facade: route registration, grouping, and dispatch.

A root ``Router`` owns the trie and the fallback configuration. Groups
and ``with_()`` views are lightweight builders that share the root's trie
and carry only their own prefix and middleware snapshot.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from rush._internal.asgi import Receive, Scope, Send
from rush._internal.types import Handler, Middleware
from rush.config import RouterConfig
from rush.errors import ConfigurationError
from rush.http.method import ALL_METHODS, Method
from rush.http.request import Request
from rush.http.response import ResponseWriter, error, redirect
from rush.middleware.chain import compose
from rush.routing.path import clean_path, needs_cleaning
from rush.routing.trie import RouteInfo, Trie

logger = logging.getLogger("rush.router")


def not_found(request: Request, response: ResponseWriter) -> None:
    """Default not-found handler: plain-text 404."""
    error(response, "404 page not found", 404)


def method_not_allowed(request: Request, response: ResponseWriter) -> None:
    """Default method-not-allowed handler: plain-text 405."""
    error(response, "Method Not Allowed", 405)


def auto_options(request: Request, response: ResponseWriter) -> None:
    """Default auto-options handler: empty 204 (``Allow`` is already set)."""
    response.write_header(204)


def redirect_trailing_slash(request: Request, response: ResponseWriter) -> None:
    """Permanently redirect to the cleaned, slash-stripped path.

    GET gets 301; every other method gets 308 so clients repeat the
    method and body.
    """
    target = clean_path(request.path)
    if request.query_string:
        target = f"{target}?{request.query_string.decode('latin-1')}"
    status = 301 if request.method == Method.GET else 308
    redirect(response, target, status)


@dataclass(frozen=True, slots=True)
class _Fallbacks:
    """Fallback handlers wrapped in the root middleware chain."""

    not_found: Handler
    method_not_allowed: Handler
    options: Handler
    redirect: Handler


def _resolve_methods(methods: Iterable[str | Method]) -> tuple[Method, ...]:
    """Uppercase, validate, de-duplicate, and expand a route's method list."""
    resolved: list[Method] = []
    for token in methods:
        method = Method.parse(str(token).upper())
        if method is None:
            msg = f"Unknown HTTP method {token!r}. Expected one of: {', '.join(ALL_METHODS)}"
            raise ConfigurationError(msg)
        if method not in resolved:
            resolved.append(method)

    if not resolved:
        return ALL_METHODS

    # HEAD must be answered by the GET handler
    if Method.GET in resolved and Method.HEAD not in resolved:
        resolved.append(Method.HEAD)
    return tuple(resolved)


class Router:
    """In-process HTTP request router.

    Usage::

        router = Router(RouterConfig(redirect_trailing_slash=True))
        router.use(RequestLogger())

        router.get("/users/{id}", show_user)

        def admin(r: Router) -> None:
            r.use(require_admin)
            r.delete("/users/{id}", delete_user)

        router.group_with_prefix("/admin", admin)

        router.serve(request, response)

    Thread safety:
        Registration is single-threaded and must finish before serving.
        Serving never mutates the trie. The root fallback chain is
        composed on the first request under a Lock + double-check, so
        exactly one thread builds it.
    """

    __slots__ = (
        "_fallbacks",
        "_lock",
        "_method_not_allowed",
        "_not_found",
        "_options",
        "_root",
        "config",
        "middlewares",
        "prefix",
        "trie",
    )

    def __init__(self, config: RouterConfig | None = None) -> None:
        self.config: RouterConfig = config or RouterConfig()
        self.trie: Trie = Trie()
        self.prefix: str = ""
        self.middlewares: list[Middleware] = []
        self._root: Router = self

        # Root-only configuration
        self._not_found: Handler = not_found
        self._method_not_allowed: Handler = method_not_allowed
        self._options: Handler = auto_options
        self._fallbacks: _Fallbacks | None = None
        self._lock: threading.Lock = threading.Lock()

    def _derive(self, prefix: str, middlewares: list[Middleware]) -> Router:
        """Create a builder view sharing this router's trie and root."""
        sub = object.__new__(type(self))
        sub.config = self.config
        sub.trie = self.trie
        sub.prefix = prefix
        sub.middlewares = middlewares
        sub._root = self._root
        return sub

    @property
    def is_root(self) -> bool:
        """True for the router that owns the trie and fallback handlers."""
        return self._root is self

    # -- Middleware and grouping --

    def use(self, *middlewares: Middleware) -> None:
        """Append *middlewares* to this router's own chain.

        Affects only routes registered through this router afterwards.
        On the root, it also wraps the fallback handlers, so it must be
        called before the first request is served.
        """
        if self.is_root and self._fallbacks is not None:
            msg = (
                "Cannot add middleware to the root router after it has started "
                "serving requests. Call use() before the first request."
            )
            raise ConfigurationError(msg)
        self.middlewares.extend(middlewares)

    def group(self, fn: Callable[[Router], Any]) -> None:
        """Call *fn* with a sub-router holding a snapshot of this chain.

        Middleware added inside *fn* never leaks to siblings or the parent.
        """
        fn(self._derive(self.prefix, list(self.middlewares)))

    def group_with_prefix(self, prefix: str, fn: Callable[[Router], Any]) -> None:
        """As ``group``, with *prefix* appended to this router's prefix."""
        fn(self._derive(self.prefix + prefix, list(self.middlewares)))

    def with_(self, *middlewares: Middleware) -> Router:
        """Return a sub-router for one registration, with *middlewares* appended.

        The receiver is left untouched::

            router.with_(rate_limit).post("/login", login)
        """
        return self._derive(self.prefix, [*self.middlewares, *middlewares])

    # -- Route registration --

    def handle(self, pattern: str, handler: Any, *methods: str | Method) -> None:
        """Register *handler* for *pattern* and *methods*.

        *handler* is either a ``Handler`` callable or an object exposing
        ``serve(request, response)``, such as another ``Router``.

        With no methods the route answers every method in ``ALL_METHODS``.
        GET implies HEAD. The current middleware chain is applied now;
        later ``use()`` calls do not reach this route.
        """
        serve = getattr(handler, "serve", None)
        self.handle_func(pattern, serve if callable(serve) else handler, *methods)

    def handle_func(self, pattern: str, handler: Handler, *methods: str | Method) -> None:
        """Register a plain handler function. See ``handle``."""
        resolved = _resolve_methods(methods)
        path = self.prefix + pattern
        self.trie.insert(path, compose(self.middlewares, handler), resolved, endpoint=handler)
        logger.debug("route %s %s", ",".join(resolved), path)

    def route(self, pattern: str, *methods: str | Method) -> Callable[[Handler], Handler]:
        """Register a handler via decorator.

        Usage::

            @router.route("/users", "GET", "POST")
            def users(request: Request, response: ResponseWriter) -> None: ...
        """

        def decorator(func: Handler) -> Handler:
            self.handle_func(pattern, func, *methods)
            return func

        return decorator

    def get(self, pattern: str, handler: Handler) -> None:
        self.handle_func(pattern, handler, Method.GET)

    def head(self, pattern: str, handler: Handler) -> None:
        self.handle_func(pattern, handler, Method.HEAD)

    def post(self, pattern: str, handler: Handler) -> None:
        self.handle_func(pattern, handler, Method.POST)

    def put(self, pattern: str, handler: Handler) -> None:
        self.handle_func(pattern, handler, Method.PUT)

    def patch(self, pattern: str, handler: Handler) -> None:
        self.handle_func(pattern, handler, Method.PATCH)

    def delete(self, pattern: str, handler: Handler) -> None:
        self.handle_func(pattern, handler, Method.DELETE)

    def options(self, pattern: str, handler: Handler) -> None:
        self.handle_func(pattern, handler, Method.OPTIONS)

    @property
    def routes(self) -> list[RouteInfo]:
        """All registered routes, for introspection."""
        return self.trie.routes()

    # -- Root configuration --

    @property
    def not_found(self) -> Handler:
        """Handler for paths with no matching route."""
        return self._root._not_found

    @not_found.setter
    def not_found(self, handler: Handler) -> None:
        self._set_fallback("_not_found", handler)

    @property
    def method_not_allowed(self) -> Handler:
        """Handler for a matched path without a handler for the method."""
        return self._root._method_not_allowed

    @method_not_allowed.setter
    def method_not_allowed(self, handler: Handler) -> None:
        self._set_fallback("_method_not_allowed", handler)

    @property
    def auto_options(self) -> Handler:
        """Handler for OPTIONS on a matched path with no explicit OPTIONS route."""
        return self._root._options

    @auto_options.setter
    def auto_options(self, handler: Handler) -> None:
        self._set_fallback("_options", handler)

    def _set_fallback(self, slot: str, handler: Handler) -> None:
        if not self.is_root:
            msg = "Fallback handlers can only be configured on the root router."
            raise ConfigurationError(msg)
        if self._fallbacks is not None:
            msg = "Cannot change fallback handlers after the router has started serving requests."
            raise ConfigurationError(msg)
        setattr(self, slot, handler)

    # -- Dispatch --

    def _ensure_fallbacks(self) -> _Fallbacks:
        """Compose the root chain around the fallback handlers, exactly once."""
        root = self._root
        fallbacks = root._fallbacks
        if fallbacks is not None:
            return fallbacks
        with root._lock:
            if root._fallbacks is None:
                chain = tuple(root.middlewares)
                root._fallbacks = _Fallbacks(
                    not_found=compose(chain, root._not_found),
                    method_not_allowed=compose(chain, root._method_not_allowed),
                    options=compose(chain, root._options),
                    redirect=compose(chain, redirect_trailing_slash),
                )
            return root._fallbacks

    def serve(self, request: Request, response: ResponseWriter) -> None:
        """Route *request* and write exactly one outcome into *response*.

        Outcomes: matched handler, trailing-slash redirect, not-found,
        auto-options, or method-not-allowed.
        """
        fallbacks = self._ensure_fallbacks()

        raw = request.path
        path = clean_path(raw) if needs_cleaning(raw) else raw

        match = self.trie.lookup(path)
        if match is None:
            logger.debug("404 %s %s", request.method, raw)
            fallbacks.not_found(request, response)
            return

        if self.config.redirect_trailing_slash and path != "/" and raw.endswith("/"):
            fallbacks.redirect(request, response)
            return

        node = match.node
        method = Method.parse(request.method)
        handler = node.handlers.get(method) if method is not None else None
        if handler is None:
            response.headers["Allow"] = node.allow
            if method is Method.OPTIONS:
                fallbacks.options(request, response)
            else:
                logger.debug("405 %s %s", request.method, raw)
                fallbacks.method_not_allowed(request, response)
            return

        request.path_params.update(match.params)
        handler(request, response)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point. See ``rush.server.asgi``."""
        from rush.server.asgi import handle_asgi

        await handle_asgi(self, scope, receive, send)
