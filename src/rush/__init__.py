"""Rush: an in-process HTTP request router.

Matches each request to the single most specific route (exact segment >
``{param}`` > trailing ``*``) and runs it through composable middleware.

Basic usage::

    from rush import Router

    router = Router()

    @router.route("/users/{id}", "GET")
    def show(request, response):
        response.write(f"user {request.path_value('id')}")

Any ASGI server can host a router directly::

    uvicorn myapp:router
"""

# Declare free-threading support (PEP 703)
_Py_mod_gil = 0

__version__ = "0.1.0"
__all__ = [
    "ALL_METHODS",
    "ConfigurationError",
    "Handler",
    "Method",
    "Middleware",
    "Request",
    "ResponseWriter",
    "Router",
    "RouterConfig",
    "RushError",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import rush`` fast while providing a clean top-level API.
    """
    if name == "Router":
        from rush.router import Router

        return Router

    if name == "RouterConfig":
        from rush.config import RouterConfig

        return RouterConfig

    if name == "Request":
        from rush.http.request import Request

        return Request

    if name == "ResponseWriter":
        from rush.http.response import ResponseWriter

        return ResponseWriter

    if name in ("Method", "ALL_METHODS"):
        from rush.http import method

        return getattr(method, name)

    if name in ("Handler", "Middleware"):
        from rush._internal import types

        return getattr(types, name)

    if name in ("RushError", "ConfigurationError"):
        from rush import errors

        return getattr(errors, name)

    msg = f"module 'rush' has no attribute {name!r}"
    raise AttributeError(msg)
