"""Resource Location tests — path priority and the never-absent handle.

Tests cover:
    - Suffix wins over the 'path' parameter
    - Blank suffix falls back to the 'path' parameter
    - Nothing given / unresolvable path -> invalid handle (never None)
"""

from dataclasses import dataclass, field

from starlette.datastructures import ImmutableMultiDict

from console_api.core.resources import (
    Resource, ResourceHandle, get_path, get_resource,
)
from console_api.infrastructure.resource_store import MappingResourceResolver

_RESOLVER = MappingResourceResolver({
    "/content": {"jcr:primaryType": "sling:Folder"},
    "/content/site": {"sling:resourceType": "console/site", "title": "Site"},
    "/apps": {},
})


@dataclass
class _Request:
    suffix: str | None = None
    params: ImmutableMultiDict = field(default_factory=ImmutableMultiDict)
    resolver: MappingResourceResolver | None = _RESOLVER


def _params(**values) -> ImmutableMultiDict:
    return ImmutableMultiDict(list(values.items()))


# --- get_path -----------------------------------------------------------------


def test_suffix_preferred_over_path_parameter():
    request = _Request("/content/site", _params(path="/apps"))
    assert get_path(request) == "/content/site"


def test_blank_suffix_falls_back_to_path_parameter():
    assert get_path(_Request(None, _params(path="/apps"))) == "/apps"
    assert get_path(_Request("   ", _params(path="/apps"))) == "/apps"


def test_no_suffix_and_no_parameter_gives_none():
    assert get_path(_Request()) is None


# --- get_resource -------------------------------------------------------------


def test_resolves_existing_resource():
    handle = get_resource(_Request("/content/site"))
    assert handle.is_valid()
    assert handle.name == "site"
    assert handle.resource_type == "console/site"
    assert handle.get_property("title") == "Site"


def test_resolves_path_parameter_when_suffix_blank():
    handle = get_resource(_Request("", _params(path="/apps")))
    assert handle.is_valid()
    assert handle.path == "/apps"


def test_unresolvable_path_gives_invalid_handle():
    handle = get_resource(_Request("/content/missing"))
    assert handle is not None
    assert not handle.is_valid()
    assert handle.path == "/content/missing"
    assert handle.get_property("title", "fallback") == "fallback"


def test_blank_suffix_and_missing_parameter_gives_invalid_handle():
    handle = get_resource(_Request(" "))
    assert isinstance(handle, ResourceHandle)
    assert not handle.is_valid()
    assert handle.name is None


def test_missing_resolver_gives_invalid_handle():
    handle = get_resource(_Request("/content", resolver=None))
    assert not handle.is_valid()


def test_handle_use_wraps_resource():
    handle = ResourceHandle.use(Resource(path="/a/b"))
    assert handle.is_valid()
    assert handle.path == "/a/b"
    assert "valid" in repr(handle)


def test_repeated_path_parameter_uses_first_value():
    params = ImmutableMultiDict([("path", "/apps"), ("path", "/libs")])
    assert get_path(_Request(None, params)) == "/apps"
