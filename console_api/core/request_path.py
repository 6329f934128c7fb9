"""Request Path — decomposition of the path after a service route.

Invariants:
    - "/bin/{service}" + rest, where rest is "", "/suffix...", or ".sel1.sel2.ext[/suffix...]"
    - The last dot-part is the extension, all dot-parts before it are selectors
    - The first selector names the operation
    - A rest that starts with anything else does not belong to the service (None)
    - A bare "/" suffix counts as no suffix

Design Decisions:
    - Selector/extension/suffix split follows the content-repository URL
      convention the console clients already use (node.tree.json/content/path)
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class PathInfo:
    """Selectors, extension and suffix of one request."""
    selectors: tuple[str, ...] = ()
    extension: str | None = None
    suffix: str | None = None

    @property
    def operation(self) -> str | None:
        return self.selectors[0] if self.selectors else None


def parse_path_info(rest: str) -> PathInfo | None:
    """Split the path remainder after the service route, None if not ours."""
    if not rest:
        return PathInfo()
    if rest.startswith("/"):
        return PathInfo(suffix=_suffix(rest))
    if not rest.startswith("."):
        return None
    head, slash, tail = rest[1:].partition("/")
    parts = head.split(".")
    if not all(parts):
        return None
    *selectors, extension = parts
    return PathInfo(
        selectors=tuple(selectors),
        extension=extension,
        suffix=_suffix(slash + tail),
    )


def _suffix(path: str) -> str | None:
    return path if path.strip("/") else None
