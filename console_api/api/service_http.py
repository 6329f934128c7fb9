"""Service Request/Response — per-request model handed to operations.

Invariants:
    - ServiceRequest is built once per HTTP request, body read before dispatch
    - charset = the endpoint's mapping charset, used to decode JSON bodies
    - Parameters = query string, then string form fields (multi-valued, order kept)
    - ServiceResponse is a mutable sink: status, multi-valued headers, buffered body
    - send_error() replaces any buffered body with the plain-text message
    - to_response() is called exactly once, after the operation returned

Design Decisions:
    - Buffered sink over streaming: answers are small, and an exception raised
      mid-encoding must not leave half a JSON document on the wire
    - Form parsing delegated to Starlette (python-multipart) — uploads stay
      reachable through `files`, only str fields become parameters
"""

import io
from dataclasses import dataclass, field

from fastapi import Request
from fastapi.responses import Response
from starlette.datastructures import ImmutableMultiDict, MutableHeaders, UploadFile

from console_api.core.domain_types import DEFAULT_LOCALE, HttpMethod, Locale
from console_api.core.json_writer import JsonWriter
from console_api.core.language_strings import locale_from_accept_language, translate
from console_api.core.request_path import PathInfo
from console_api.core.resources import ResourceResolver

JSON_CONTENT_TYPE = "application/json"
TEXT_CONTENT_TYPE = "text/plain"

_FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


@dataclass
class ServiceRequest:
    """One request to a service endpoint."""
    method: HttpMethod = HttpMethod.GET
    path_info: PathInfo = field(default_factory=PathInfo)
    params: ImmutableMultiDict = field(default_factory=ImmutableMultiDict)
    files: ImmutableMultiDict = field(default_factory=ImmutableMultiDict)
    body: bytes = b""
    locale: Locale = DEFAULT_LOCALE
    resolver: ResourceResolver | None = None
    path: str = ""
    charset: str = "utf-8"

    @property
    def suffix(self) -> str | None:
        return self.path_info.suffix

    @property
    def operation(self) -> str | None:
        return self.path_info.operation

    def i18n(self, text: str) -> str:
        return translate(self.locale, text)

    @classmethod
    async def from_request(
        cls, request: Request, path_info: PathInfo,
        resolver: ResourceResolver | None = None,
        default_locale: Locale = DEFAULT_LOCALE,
        charset: str = "utf-8",
    ) -> "ServiceRequest":
        """Read body and parameters of an incoming Starlette request."""
        body = await request.body()
        items = list(request.query_params.multi_items())
        files: list[tuple[str, UploadFile]] = []
        content_type = request.headers.get("content-type", "")
        if content_type.startswith(_FORM_CONTENT_TYPES):
            form = await request.form()
            for key, value in form.multi_items():
                if isinstance(value, str):
                    items.append((key, value))
                else:
                    files.append((key, value))
        return cls(
            method=HttpMethod(request.method.upper()),
            path_info=path_info,
            params=ImmutableMultiDict(items),
            files=ImmutableMultiDict(files),
            body=body,
            locale=locale_from_accept_language(
                request.headers.get("accept-language"), default_locale,
            ),
            resolver=resolver,
            path=request.url.path,
            charset=charset,
        )


class ServiceResponse:
    """Mutable answer of an operation, converted to a Response at the end."""

    def __init__(self, charset: str = "utf-8"):
        self.status_code = 200
        self.headers = MutableHeaders()
        self.charset = charset
        self._body = io.StringIO()

    @property
    def body(self) -> str:
        return self._body.getvalue()

    def set_content_type(self, media_type: str) -> None:
        self.headers["content-type"] = f"{media_type}; charset={self.charset}"

    def get_writer(self) -> io.StringIO:
        return self._body

    def get_json_writer(self) -> JsonWriter:
        self.set_content_type(JSON_CONTENT_TYPE)
        return JsonWriter(self._body)

    def reset_body(self) -> None:
        self._body = io.StringIO()

    def send_error(self, status_code: int, message: str | None = None) -> None:
        """Plain-text error answer; discards anything written so far."""
        self.status_code = status_code
        self.reset_body()
        if message is not None:
            self.set_content_type(TEXT_CONTENT_TYPE)
            self._body.write(message)

    def to_response(self) -> Response:
        response = Response(
            content=self._body.getvalue().encode(self.charset),
            status_code=self.status_code,
        )
        response.raw_headers.extend(self.headers.raw)
        return response
