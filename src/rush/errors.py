"""Rush exception hierarchy.

Shared across the trie, the router facade, and the CLI so every module
raises and catches the same types.

Request-time outcomes (no match, wrong method) are not exceptions: the
router answers them with its fallback handlers.
"""


class RushError(Exception):
    """Base for all rush-specific errors."""


class ConfigurationError(RushError):
    """Raised when the route table or router configuration is invalid.

    Always raised at registration time, before the first request is
    served, so a broken route table stops startup instead of misrouting.
    """
