"""Language Strings — message catalogs for user-facing console text.

Invariants:
    - All strings are pure data (no IO, no computation beyond lookup)
    - The English text IS the message key; EN needs no catalog
    - Unknown keys are returned unchanged (never raises)
    - locale_from_accept_language always returns a valid Locale

Design Decisions:
    - Source text as key: handlers pass readable templates and stay correct
      even when a catalog entry is missing
    - Catalogs hold the template BEFORE value interpolation, so placeholders
      ({}) must survive translation
"""

import math

from console_api.core.domain_types import DEFAULT_LOCALE, Locale

ITEM_EXISTS_MESSAGE = (
    "An element with the same name exists already - use a different name!"
)


# --- Catalogs (EN source text -> localized template) -------------------------

_CATALOGS: dict[Locale, dict[str, str]] = {
    Locale.DE: {
        ITEM_EXISTS_MESSAGE: (
            "Ein Element mit diesem Namen existiert bereits - "
            "bitte einen anderen Namen verwenden!"
        ),
        "a valid path must be specified": "ein gültiger Pfad muss angegeben werden",
        "a name must be specified": "ein Name muss angegeben werden",
        "invalid value '{}'": "ungültiger Wert '{}'",
        "missing {}": "{} fehlt",
    },
    Locale.PT_BR: {
        ITEM_EXISTS_MESSAGE: (
            "Ja existe um elemento com o mesmo nome - use um nome diferente!"
        ),
        "a valid path must be specified": "um caminho valido deve ser informado",
        "a name must be specified": "um nome deve ser informado",
        "invalid value '{}'": "valor invalido '{}'",
        "missing {}": "{} ausente",
    },
}

# Language tags (lowercase, primary subtag fallback) -> Locale
_TAG_TO_LOCALE: dict[str, Locale] = {
    "en": Locale.EN,
    "de": Locale.DE,
    "pt": Locale.PT_BR,
    "pt-br": Locale.PT_BR,
}


def translate(locale: Locale, text: str) -> str:
    """Localized template for `text`, or `text` itself if not cataloged."""
    return _CATALOGS.get(locale, {}).get(text, text)


def locale_from_accept_language(
    header: str | None, default: Locale = DEFAULT_LOCALE,
) -> Locale:
    """Pick the best supported Locale from an Accept-Language header.

    Entries are ranked by their q-value (missing q = 1.0, malformed or non-finite q = 0);
    ties keep header order. "pt-PT" falls back to its primary subtag "pt".
    """
    if not header:
        return default
    ranked: list[tuple[float, int, str]] = []
    for index, entry in enumerate(header.split(",")):
        tag, _, params = entry.strip().partition(";")
        if not tag:
            continue
        ranked.append((_quality(params), index, tag.strip().lower()))
    ranked.sort(key=lambda item: (-item[0], item[1]))
    for quality, _, tag in ranked:
        if quality <= 0:
            break
        locale = _TAG_TO_LOCALE.get(tag) or _TAG_TO_LOCALE.get(tag.split("-")[0])
        if locale:
            return locale
    return default


def _quality(params: str) -> float:
    for param in params.split(";"):
        key, _, value = param.strip().partition("=")
        if key.strip() == "q":
            try:
                quality = float(value)
            except ValueError:
                return 0.0
            return quality if math.isfinite(quality) else 0.0
    return 1.0
