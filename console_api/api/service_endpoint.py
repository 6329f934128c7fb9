"""Service Endpoint — base for all '/bin/{service}/path/to/resource' endpoints.

Invariants:
    - Disabled endpoint: 503, empty body, operation set never invoked
    - Enabled endpoint: no-cache headers set BEFORE delegating to the operation set
    - Every verb entry point goes through the same enablement gate
    - JSON bodies decoded with the configured mapping charset and the shared,
      cached pydantic TypeAdapter per target type
    - Enablement checked before the body or form is read
    - ConsoleError raised by an operation is answered on the same response
      (no-cache headers kept)
    - Decode failures (pydantic.ValidationError, UnicodeDecodeError) propagate;
      the operation decides the status code

Design Decisions:
    - Subclass per service provides service_name + operations; is_enabled()
      defaults to the disabled_services setting
    - Three routes per service ('/bin/name', '/bin/name.{selectors}',
      '/bin/name/{suffix}') so a name never matches a longer name sharing its
      prefix; the rest is decomposed by parse_path_info, so
      selectors/extension/suffix follow the repository URL convention
    - Module-level helpers (headers, canned answers, body decoding) usable
      from operations without an endpoint instance
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from email.utils import formatdate
from functools import lru_cache
from typing import Any, TypeVar, get_origin

from fastapi import APIRouter, Request, status
from fastapi.responses import Response
from pydantic import TypeAdapter

from console_api.api.operation_set import OperationSet, write_error
from console_api.api.service_http import ServiceRequest, ServiceResponse
from console_api.config import Settings, get_settings
from console_api.core.domain_types import HttpMethod, MessageLevel
from console_api.core.encode_value import encode_value
from console_api.core.errors import ConsoleError
from console_api.core.language_strings import ITEM_EXISTS_MESSAGE
from console_api.core.request_path import parse_path_info
from console_api.core.resources import ResourceResolver
from console_api.core.validation import ParameterValidator

logger = logging.getLogger(__name__)

SERVICE_ROOT = "/bin"

T = TypeVar("T")


class ServiceEndpoint(ABC):
    """Gate, header hardening and delegation for one service."""

    service_name: str = ""

    def __init__(
        self, resolver: ResourceResolver | None = None,
        settings: Settings | None = None,
    ):
        if not self.service_name:
            raise ValueError(f"{type(self).__name__} must define service_name")
        self.resolver = resolver
        self.settings = settings or get_settings()

    @property
    @abstractmethod
    def operations(self) -> OperationSet:
        """The operation set requests are delegated to."""

    def is_enabled(self) -> bool:
        return self.service_name not in self.settings.disabled_services

    def check_enabled(self, response: ServiceResponse) -> bool:
        """Answer 503 (empty) if the service is switched off."""
        enabled = self.is_enabled()
        if not enabled:
            logger.info(
                f"Service '{self.service_name}' is disabled",
                extra={"service": self.service_name, "status_code": 503},
            )
            response.reset_body()
            response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return enabled

    # ─── Verb entry points ──────────────────────────────────────

    async def do_get(self, request: ServiceRequest, response: ServiceResponse) -> None:
        if self.check_enabled(response):
            set_no_cache_headers(response)
            await self.operations.do_get(request, response)

    async def do_post(self, request: ServiceRequest, response: ServiceResponse) -> None:
        if self.check_enabled(response):
            set_no_cache_headers(response)
            await self.operations.do_post(request, response)

    async def do_put(self, request: ServiceRequest, response: ServiceResponse) -> None:
        if self.check_enabled(response):
            set_no_cache_headers(response)
            await self.operations.do_put(request, response)

    async def do_delete(self, request: ServiceRequest, response: ServiceResponse) -> None:
        if self.check_enabled(response):
            set_no_cache_headers(response)
            await self.operations.do_delete(request, response)

    # ─── HTTP binding ───────────────────────────────────────────

    @property
    def route_path(self) -> str:
        return f"{SERVICE_ROOT}/{self.service_name}"

    def router(self) -> APIRouter:
        """Routes for '/bin/name', '/bin/name.sel.ext/...' and '/bin/name/...'."""
        router = APIRouter(tags=[self.service_name])
        methods = [method.value for method in HttpMethod]
        for path in (
            self.route_path,
            self.route_path + ".{selectors:path}",
            self.route_path + "/{suffix:path}",
        ):
            router.add_api_route(
                path, self.handle, methods=methods, include_in_schema=False,
            )
        return router

    async def handle(self, request: Request) -> Response:
        response = ServiceResponse()
        if not self.check_enabled(response):
            return response.to_response()
        path_info = parse_path_info(_path_rest(request.path_params))
        if path_info is None:
            return Response(status_code=status.HTTP_404_NOT_FOUND)
        service_request = await ServiceRequest.from_request(
            request, path_info, self.resolver, self.settings.default_locale,
            charset=self.settings.mapping_charset,
        )
        entry_points = {
            HttpMethod.GET: self.do_get,
            HttpMethod.POST: self.do_post,
            HttpMethod.PUT: self.do_put,
            HttpMethod.DELETE: self.do_delete,
        }
        try:
            await entry_points[service_request.method](service_request, response)
        except ConsoleError as exc:
            self._answer_error(service_request, response, exc)
        return response.to_response()

    def _answer_error(
        self, request: ServiceRequest, response: ServiceResponse, exc: ConsoleError,
    ) -> None:
        """Error raised by an operation: envelope on the same response, headers kept."""
        if exc.context.service is None:
            exc.context.service = self.service_name
        if exc.context.path is None:
            exc.context.path = request.path
        logger.error(
            f"ConsoleError: {exc.message}",
            extra={
                "service": self.service_name, "operation": request.operation,
                "error_code": exc.code, "path": request.path,
                "status_code": exc.http_status,
            },
        )
        write_error(response, exc)

    # ─── Helpers for operations ─────────────────────────────────

    def validation(self, request: ServiceRequest) -> ParameterValidator:
        return ParameterValidator(request)

    def json_answer(self, response: ServiceResponse, value: Any) -> None:
        encode_value(
            response.get_json_writer(), value,
            max_iterator_items=self.settings.encoder_max_iterator_items,
        )


def _path_rest(path_params: Mapping[str, str]) -> str:
    """Re-join the separator the matched route consumed."""
    if "selectors" in path_params:
        return "." + path_params["selectors"]
    if "suffix" in path_params:
        return "/" + path_params["suffix"]
    return ""


# ─── HTTP control ───────────────────────────────────────────────

def set_no_cache_headers(response: ServiceResponse | Response) -> None:
    response.headers["cache-control"] = "no-cache"
    response.headers.append("cache-control", "no-store")
    response.headers.append("cache-control", "must-revalidate")
    response.headers["pragma"] = "no-cache"
    response.headers["expires"] = formatdate(0, usegmt=True)


# ─── Default answers ────────────────────────────────────────────

def answer_item_exists(request: ServiceRequest, response: ServiceResponse) -> None:
    """409 with the 'name exists already' warning envelope."""
    response.status_code = status.HTTP_409_CONFLICT
    writer = response.get_json_writer()
    writer.begin_object()
    writer.name("success").value(False)
    writer.name("messages").begin_array()
    writer.begin_object()
    writer.name("level").value(MessageLevel.WARN.value)
    writer.name("text").value(request.i18n(ITEM_EXISTS_MESSAGE))
    writer.end_object()
    writer.end_array()
    writer.end_object()


# ─── JSON body decoding ─────────────────────────────────────────

@lru_cache(maxsize=None)
def json_decoder(type_: Any) -> TypeAdapter:
    """Shared decoder per target type (built once, reused by all requests)."""
    return TypeAdapter(type_)


def read_json_object(
    request: ServiceRequest, type_: type[T],
    instance_creator: Callable[[Any], T] | None = None,
    charset: str | None = None,
) -> T:
    """Decode the request body into `type_`.

    With `instance_creator` the body is decoded to plain JSON data and the
    creator builds the instance (for types pydantic can't construct itself).
    """
    text = request.body.decode(charset or request.charset)
    if instance_creator is None:
        return parse_json_object(text, type_)
    instance = instance_creator(json_decoder(Any).validate_json(text))
    if (
        get_origin(type_) is None and isinstance(type_, type)
        and not isinstance(instance, type_)
    ):
        raise TypeError(
            f"instance creator returned {type(instance).__name__}, "
            f"expected {type_.__name__}",
        )
    return instance


def parse_json_object(text: str, type_: type[T]) -> T:
    """Decode a JSON document held in memory into `type_`."""
    return json_decoder(type_).validate_json(text)

