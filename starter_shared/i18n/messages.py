"""
Localized message lookup.

Usage:
    from starter_shared.i18n import default_messages

    msg = default_messages.lookup("controller.page_not_found", (5, 2), "es-AR")
    # "Página 5 no encontrada, páginas disponibles: 2"

Messages use positional ``{0}`` placeholders. Lookup falls back from a
regional locale to its language ("es-AR" -> "es"), then to the default
locale, and finally to the key itself.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from starter_shared.config.constants import MessageKeys
from starter_shared.config.logging import get_logger
from starter_shared.config.settings import settings

logger = get_logger(__name__)


DEFAULT_CATALOGS: dict[str, dict[str, str]] = {
    "en": {
        MessageKeys.PAGE_NOT_FOUND: "Page {0} not found, available pages: {1}",
    },
    "es": {
        MessageKeys.PAGE_NOT_FOUND: "Página {0} no encontrada, páginas disponibles: {1}",
    },
}


class MessageSource:
    """Catalog-backed message collaborator."""

    def __init__(
        self,
        catalogs: Mapping[str, Mapping[str, str]] | None = None,
        default_locale: str | None = None,
    ):
        self._catalogs = {k.lower(): dict(v) for k, v in (catalogs or DEFAULT_CATALOGS).items()}
        self._default_locale = (default_locale or settings.default_locale).lower()

    @property
    def default_locale(self) -> str:
        return self._default_locale

    def _candidates(self, locale: str | None) -> list[str]:
        candidates: list[str] = []
        if locale:
            normalized = locale.replace("_", "-").lower()
            candidates.append(normalized)
            language = normalized.split("-", 1)[0]
            if language != normalized:
                candidates.append(language)
        candidates.append(self._default_locale)
        return candidates

    def lookup(self, key: str, args: Sequence[Any] = (), locale: str | None = None) -> str:
        """Render the message for key in the best matching locale."""
        for candidate in self._candidates(locale):
            template = self._catalogs.get(candidate, {}).get(key)
            if template is not None:
                return template.format(*args)

        logger.warning("Missing message", key=key, locale=locale)
        return key


def parse_accept_language(header: str | None) -> str | None:
    """
    Return the preferred language tag of an Accept-Language header.

    "es-AR,es;q=0.9,en;q=0.8" -> "es-AR". Entries are ranked by q value;
    "*" and malformed weights are ignored.
    """
    if not header:
        return None

    best: tuple[float, str] | None = None
    for part in header.split(","):
        tag, _, params = part.strip().partition(";")
        tag = tag.strip()
        if not tag or tag == "*":
            continue
        quality = 1.0
        params = params.strip()
        if params.startswith("q="):
            try:
                quality = float(params[2:])
            except ValueError:
                continue
        if best is None or quality > best[0]:
            best = (quality, tag)

    return best[1] if best else None


default_messages = MessageSource()
