"""Operation Set — explicit routing from (HTTP method, operation) to handler.

Invariants:
    - Every key -> handler mapping is registered explicitly (no auto-discovery)
    - A key is registered at most once (duplicate -> ValueError)
    - Table written at startup only; request handling reads it concurrently
    - Operation selector: first request selector, else the 'cmd' parameter
    - Unmatched request never raises: 405 (+Allow) if the operation exists for
      other methods, 404 otherwise, both with the JSON error envelope

Design Decisions:
    - Explicit dict over getattr: every mapping visible in one place
      (ADR: ExMA no convention-over-config)
    - One entry point per verb so endpoints delegate without re-inspecting the method
"""

import json
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from console_api.api.service_http import JSON_CONTENT_TYPE, ServiceRequest, ServiceResponse
from console_api.core.domain_types import PARAM_CMD, HttpMethod, OperationName
from console_api.core.errors import (
    ConsoleError, ErrorContext, OperationMethodNotAllowedError, OperationNotFoundError,
)
from console_api.core.resources import first_param

logger = logging.getLogger(__name__)

Operation = Callable[[ServiceRequest, ServiceResponse], Awaitable[None]]


@dataclass(frozen=True)
class OperationKey:
    """Registration key of one operation."""
    method: HttpMethod
    operation: OperationName


class OperationSet:
    """Routes requests to operations. Explicit registration, no auto-discovery."""

    def __init__(self, name: str):
        self.name = name
        self._operations: dict[OperationKey, Operation] = {}

    def add_operation(
        self, method: HttpMethod, operation: str, handler: Operation,
    ) -> "OperationSet":
        key = OperationKey(HttpMethod(method), OperationName(operation))
        if key in self._operations:
            raise ValueError(
                f"{self.name}: operation {key.method.value} '{operation}' already registered",
            )
        self._operations[key] = handler
        return self

    def operations(self) -> list[OperationKey]:
        return list(self._operations)

    def get_operation(
        self, method: HttpMethod, request: ServiceRequest,
    ) -> Operation | None:
        selector = self.selector(request)
        if not selector:
            return None
        return self._operations.get(OperationKey(method, OperationName(selector)))

    @staticmethod
    def selector(request: ServiceRequest) -> str | None:
        return request.operation or first_param(request.params, PARAM_CMD)

    async def do_get(self, request: ServiceRequest, response: ServiceResponse) -> None:
        await self._dispatch(HttpMethod.GET, request, response)

    async def do_post(self, request: ServiceRequest, response: ServiceResponse) -> None:
        await self._dispatch(HttpMethod.POST, request, response)

    async def do_put(self, request: ServiceRequest, response: ServiceResponse) -> None:
        await self._dispatch(HttpMethod.PUT, request, response)

    async def do_delete(self, request: ServiceRequest, response: ServiceResponse) -> None:
        await self._dispatch(HttpMethod.DELETE, request, response)

    async def _dispatch(
        self, method: HttpMethod, request: ServiceRequest, response: ServiceResponse,
    ) -> None:
        handler = self.get_operation(method, request)
        selector = self.selector(request)
        if handler is None:
            self._answer_not_handled(method, selector, request, response)
            return
        logger.debug(
            f"{self.name}: {method.value} '{selector}'",
            extra={"service": self.name, "operation": selector, "method": method.value},
        )
        await handler(request, response)

    def _answer_not_handled(
        self, method: HttpMethod, selector: str | None,
        request: ServiceRequest, response: ServiceResponse,
    ) -> None:
        context = ErrorContext(service=self.name, operation=selector, path=request.path)
        allowed = sorted(
            key.method.value for key in self._operations
            if selector and key.operation == selector
        )
        error: ConsoleError
        if allowed:
            error = OperationMethodNotAllowedError(selector, method.value, allowed, context)
            response.headers["allow"] = ", ".join(allowed)
        else:
            error = OperationNotFoundError(selector, context)
        logger.info(
            f"{self.name}: {error.message}",
            extra={
                "service": self.name, "operation": selector,
                "method": method.value, "error_code": error.code,
                "status_code": error.http_status,
            },
        )
        write_error(response, error)


def write_error(response: ServiceResponse, error: ConsoleError) -> None:
    """Answer with the error's status and JSON envelope."""
    response.status_code = error.http_status
    response.reset_body()
    response.set_content_type(JSON_CONTENT_TYPE)
    response.get_writer().write(json.dumps(error.to_response(), ensure_ascii=False))
