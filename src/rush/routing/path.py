"""URL path segmentation and normalization."""


def split_path(path: str) -> list[str]:
    """Split *path* on ``/``, dropping empty segments.

    ``"/a//b/"`` and ``"/a/b"`` both give ``["a", "b"]``.
    """
    return [part for part in path.split("/") if part]


def needs_cleaning(path: str) -> bool:
    """Fast scan: does *path* differ from its cleaned form?

    Lets the dispatcher skip ``clean_path`` (and its allocations) for the
    common already-canonical path.
    """
    if not path.startswith("/"):
        return True
    if len(path) > 1 and path.endswith("/"):
        return True
    return (
        "//" in path
        or "/./" in path
        or "/../" in path
        or path.endswith(("/.", "/.."))
    )


def clean_path(path: str) -> str:
    """Return the canonical form of a rooted URL path.

    Collapses repeated slashes, resolves ``.`` and ``..`` (never above
    the root), and drops any trailing slash::

        clean_path("/a//b/./c/../")  -> "/a/b"
        clean_path("/../x")          -> "/x"
        clean_path("")               -> "/"
    """
    stack: list[str] = []
    for part in path.split("/"):
        if not part or part == ".":
            continue
        if part == "..":
            if stack:
                stack.pop()
            continue
        stack.append(part)
    return "/" + "/".join(stack)
