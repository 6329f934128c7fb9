"""Domain Types — enums and aliases shared by the endpoint kernel.

Invariants:
    - HTTP verbs handled by the kernel are exactly GET, POST, PUT, DELETE
    - Locale covers every catalog in language_strings
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - str Enums: compare equal to the raw wire value and serialize without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

ResourcePath = NewType("ResourcePath", str)
OperationName = NewType("OperationName", str)


# ─── Enums ───────────────────────────────────────────────────────

class HttpMethod(str, Enum):
    """Verbs dispatched to operations."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class Locale(str, Enum):
    """Console UI languages with a message catalog."""
    EN = "en"
    DE = "de"
    PT_BR = "pt-BR"


class MessageLevel(str, Enum):
    """Severity of a message shown to the console user."""
    INFO = "info"
    WARN = "warn"
    ERROR = "error"


# ─── Request Parameters ──────────────────────────────────────────

PARAM_BEFORE = "before"
PARAM_CMD = "cmd"
PARAM_FILE = "file"
PARAM_FILTER = "filter"
PARAM_ID = "id"
PARAM_INDEX = "index"
PARAM_JCR_CONTENT = "jcrContent"
PARAM_LABEL = "label"
PARAM_MIME_TYPE = "mimeType"
PARAM_NAME = "name"
PARAM_PATH = "path"
PARAM_QUERY = "query"
PARAM_RESOURCE_TYPE = "resourceType"
PARAM_TITLE = "title"
PARAM_TYPE = "type"
PARAM_URL = "url"
PARAM_VALUE = "value"
PARAM_VERSION = "version"


# ─── Constants ───────────────────────────────────────────────────

DEFAULT_LOCALE = Locale.EN
