"""Segment trie with backtracking, specificity-ordered matching.

Each level of a request path is resolved in a fixed order:

1. exact literal child (and its whole subtree)
2. the single ``{param}`` child (bind, recurse, unbind on failure)
3. the ``*`` wildcard child, which swallows every remaining segment

so the most specific full-path match always wins.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from rush._internal.types import Handler
from rush.errors import ConfigurationError
from rush.http.method import Method
from rush.routing.path import split_path

WILDCARD = "*"

_MISSING = object()


@dataclass(frozen=True, slots=True)
class Match:
    """Result of a successful lookup: the terminal node and captured params."""

    node: Node
    params: dict[str, str]


@dataclass(frozen=True, slots=True)
class RouteInfo:
    """One registered handler, reconstructed from the trie for introspection."""

    pattern: str
    methods: tuple[Method, ...]
    handler: Handler


class Node:
    """A node in the route trie. Mutable during registration only."""

    __slots__ = (
        "_allow",
        "children",
        "endpoints",
        "handlers",
        "param_child",
        "segment",
        "wildcard_child",
    )

    def __init__(self, segment: str) -> None:
        # Literal text, parameter name, or "*"
        self.segment = segment
        # Static segment children: "users" -> node
        self.children: dict[str, Node] = {}
        # Single parameter child (only one param name per level)
        self.param_child: Node | None = None
        # Catch-all child, always a leaf
        self.wildcard_child: Node | None = None
        # Middleware-wrapped handlers, keyed by method
        self.handlers: dict[Method, Handler] = {}
        # Unwrapped handlers as registered, for introspection only
        self.endpoints: dict[Method, Handler] = {}
        self._allow: str | None = None

    def __repr__(self) -> str:
        return f"Node({self.segment!r}, methods={sorted(self.handlers)!r})"

    def next_or_create(self, segment: str) -> Node:
        """Return the child for pattern *segment*, creating it if needed."""
        if segment.startswith("{") and segment.endswith("}"):
            name = segment[1:-1]
            if not name:
                msg = "Empty parameter name '{}' is not allowed."
                raise ConfigurationError(msg)
            if self.param_child is None:
                self.param_child = Node(name)
            elif self.param_child.segment != name:
                msg = (
                    f"Parameter name conflict: cannot use both "
                    f"'{{{self.param_child.segment}}}' and '{{{name}}}' "
                    f"at the same path level."
                )
                raise ConfigurationError(msg)
            return self.param_child

        if segment == WILDCARD:
            if self.wildcard_child is None:
                self.wildcard_child = Node(WILDCARD)
            return self.wildcard_child

        child = self.children.get(segment)
        if child is None:
            child = self.children[segment] = Node(segment)
        return child

    @property
    def allow(self) -> str:
        """Sorted ``Allow`` header value for this node, OPTIONS always included.

        Computed on first access. The cache is a single assignment of an
        immutable string, so racing first readers store the same value.
        """
        allow = self._allow
        if allow is None:
            methods = {method.value for method in self.handlers}
            methods.add(Method.OPTIONS.value)
            allow = ", ".join(sorted(methods))
            self._allow = allow
        return allow


class Trie:
    """The route table: one root node plus insert/lookup.

    Usage::

        trie = Trie()
        trie.insert("/users/{id}", handler, [Method.GET])
        match = trie.lookup("/users/42")
        match.params  # {"id": "42"}
    """

    __slots__ = ("root",)

    def __init__(self) -> None:
        self.root = Node("/")

    def insert(
        self,
        pattern: str,
        handler: Handler,
        methods: Iterable[Method],
        *,
        endpoint: Handler | None = None,
    ) -> None:
        """Store *handler* at the node for *pattern*, once per method.

        *endpoint* is the unwrapped handler, kept for ``routes()``.
        Raises ``ConfigurationError`` for malformed patterns.
        """
        segments = split_path(pattern)
        node = self.root
        last = len(segments) - 1
        for i, segment in enumerate(segments):
            if segment == WILDCARD and i != last:
                msg = f"Wildcard '*' can only be the last segment of a route: {pattern!r}"
                raise ConfigurationError(msg)
            node = node.next_or_create(segment)

        for method in methods:
            node.handlers[method] = handler
            node.endpoints[method] = endpoint or handler
        node._allow = None

    def lookup(self, path: str) -> Match | None:
        """Resolve *path* to its most specific terminal node, or ``None``."""
        params: dict[str, str] = {}
        node = self._match(self.root, split_path(path), 0, params)
        if node is None:
            return None
        return Match(node=node, params=params)

    def _match(
        self,
        node: Node,
        parts: list[str],
        index: int,
        params: dict[str, str],
    ) -> Node | None:
        """Recursively match path parts against the trie."""
        # All parts consumed: only a node with handlers is a match
        if index == len(parts):
            return node if node.handlers else None

        part = parts[index]

        # 1. Static child first
        child = node.children.get(part)
        if child is not None:
            found = self._match(child, parts, index + 1, params)
            if found is not None:
                return found

        # 2. Parameter child, binding is undone if the subtree fails
        param = node.param_child
        if param is not None:
            name = param.segment
            previous = params.get(name, _MISSING)
            params[name] = part
            found = self._match(param, parts, index + 1, params)
            if found is not None:
                return found
            if previous is _MISSING:
                del params[name]
            else:
                params[name] = previous  # type: ignore[assignment]

        # 3. Wildcard: at least one segment remains here, take them all
        wildcard = node.wildcard_child
        if wildcard is not None:
            params[WILDCARD] = "/".join(parts[index:])
            return wildcard

        return None

    def routes(self) -> list[RouteInfo]:
        """Return every registered (pattern, methods, handler) triple.

        Methods sharing one handler at a node are reported together.
        """
        return list(self._collect(self.root, ""))

    def _collect(self, node: Node, prefix: str) -> Iterator[RouteInfo]:
        by_handler: dict[int, tuple[Handler, list[Method]]] = {}
        for method, endpoint in node.endpoints.items():
            entry = by_handler.setdefault(id(endpoint), (endpoint, []))
            entry[1].append(method)
        for endpoint, methods in by_handler.values():
            yield RouteInfo(
                pattern=prefix or "/",
                methods=tuple(sorted(methods, key=str)),
                handler=endpoint,
            )

        for segment, child in sorted(node.children.items()):
            yield from self._collect(child, f"{prefix}/{segment}")
        if node.param_child is not None:
            yield from self._collect(node.param_child, f"{prefix}/{{{node.param_child.segment}}}")
        if node.wildcard_child is not None:
            yield from self._collect(node.wildcard_child, f"{prefix}/{WILDCARD}")
