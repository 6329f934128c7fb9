"""Resource Location — target resource of a request, as a never-absent handle.

Invariants:
    - get_path: non-blank suffix wins; otherwise the 'path' parameter; no other fallback
    - get_resource ALWAYS returns a ResourceHandle; not-found is an invalid handle
    - Callers test handle.is_valid(), never `is None`
    - The core never answers 404 by itself (handlers decide)

Design Decisions:
    - Protocol over ABC for the resolver and the request: the repository
      engine and the HTTP layer live outside core (ADR: ExMA dependency arrows inward)
    - Blank path short-circuits before the resolver: no resolver is asked for ""
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

from console_api.core.domain_types import PARAM_PATH, ResourcePath


@dataclass(frozen=True)
class Resource:
    """A node of the content repository, as delivered by a resolver."""
    path: ResourcePath
    resource_type: str | None = None
    properties: Mapping[str, Any] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return self.path.rstrip("/").rsplit("/", 1)[-1]


class ResourceResolver(Protocol):
    """Contract for the content repository — implemented by infrastructure."""
    def resolve(self, path: str) -> Resource | None: ...


class ParameterSource(Protocol):
    """Multi-valued request parameters (query string + form fields)."""
    def getlist(self, key: str) -> list[Any]: ...


class LocatableRequest(Protocol):
    """What resource location needs from a request."""
    suffix: str | None
    params: ParameterSource
    resolver: ResourceResolver | None


class ResourceHandle:
    """Non-absent wrapper around a possibly unresolved resource."""

    def __init__(self, resource: Resource | None, path: str | None = None):
        self._resource = resource
        self._path = resource.path if resource is not None else path

    @classmethod
    def use(cls, resource: Resource | None, path: str | None = None) -> "ResourceHandle":
        return cls(resource, path)

    def is_valid(self) -> bool:
        return self._resource is not None

    @property
    def path(self) -> str | None:
        """Resolved path, or the requested one for an invalid handle."""
        return self._path

    @property
    def name(self) -> str | None:
        return self._resource.name if self._resource is not None else None

    @property
    def resource_type(self) -> str | None:
        return self._resource.resource_type if self._resource is not None else None

    @property
    def resource(self) -> Resource | None:
        return self._resource

    def get_property(self, name: str, default: Any = None) -> Any:
        if self._resource is None:
            return default
        return self._resource.properties.get(name, default)

    def __repr__(self) -> str:
        state = "valid" if self.is_valid() else "invalid"
        return f"ResourceHandle({self._path!r}, {state})"


def first_param(params: ParameterSource, name: str) -> Any:
    """First value of a multi-valued parameter, None if absent."""
    values = params.getlist(name)
    return values[0] if values else None


def get_path(request: LocatableRequest) -> str | None:
    """Target path: the request suffix, else the 'path' parameter."""
    path = request.suffix
    if not path or not path.strip():
        path = first_param(request.params, PARAM_PATH)
    return path


def get_resource(request: LocatableRequest) -> ResourceHandle:
    """Resolve the target path; an invalid handle stands in for not-found."""
    path = get_path(request)
    if not path or not path.strip() or request.resolver is None:
        return ResourceHandle.use(None, path)
    return ResourceHandle.use(request.resolver.resolve(path), path)
