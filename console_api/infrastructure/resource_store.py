"""In-Memory Resource Store — dict-backed ResourceResolver.

Invariants:
    - Paths are absolute and normalized: duplicate and trailing slashes dropped
    - Unknown paths resolve to None (the core turns that into an invalid handle)
    - Store content is fixed after construction (safe for concurrent reads)

Design Decisions:
    - Stands in for the content-repository engine in development and tests;
      anything with resolve(path) -> Resource | None can replace it
    - resource_type read from sling:resourceType, then jcr:primaryType
"""

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from console_api.core.domain_types import ResourcePath
from console_api.core.resources import Resource

logger = logging.getLogger(__name__)

_TYPE_PROPERTIES = ("sling:resourceType", "jcr:primaryType")


def normalize_path(path: str) -> str:
    """'//content//site/' -> '/content/site' ; blank -> '/'."""
    segments = [segment for segment in path.split("/") if segment]
    return "/" + "/".join(segments)


class MappingResourceResolver:
    """Resolves paths against a {path: properties} mapping."""

    def __init__(self, nodes: Mapping[str, Mapping[str, Any]]):
        self._resources: dict[str, Resource] = {}
        for raw_path, properties in nodes.items():
            path = normalize_path(raw_path)
            self._resources[path] = Resource(
                path=ResourcePath(path),
                resource_type=_resource_type(properties),
                properties=MappingProxyType(dict(properties)),
            )

    def resolve(self, path: str) -> Resource | None:
        resource = self._resources.get(normalize_path(path))
        if resource is None:
            logger.debug(f"Resource not found: {path}")
        return resource

    def children(self, path: str) -> list[Resource]:
        """Direct children of `path`, in insertion order."""
        parent = normalize_path(path)
        prefix = parent if parent.endswith("/") else parent + "/"
        return [
            resource for key, resource in self._resources.items()
            if key.startswith(prefix) and "/" not in key[len(prefix):]
            and key != parent
        ]

    def __len__(self) -> int:
        return len(self._resources)


def _resource_type(properties: Mapping[str, Any]) -> str | None:
    for key in _TYPE_PROPERTIES:
        value = properties.get(key)
        if value:
            return str(value)
    return None
