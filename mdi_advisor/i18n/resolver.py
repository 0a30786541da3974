"""Message resolver.

Turns ``Notice`` codes into text. A resolver is immutable; the process-wide
default can be swapped with ``configure()`` but is never consulted by the
calculators themselves.
"""

import threading
from collections.abc import Iterable
from string import Template
from typing import Any

from mdi_advisor.config import settings
from mdi_advisor.core.enums import Language
from mdi_advisor.core.models import Notice
from mdi_advisor.i18n.messages import MESSAGES
from mdi_advisor.logging_config import get_logger

logger = get_logger(__name__)


class MessageResolver:
    """Resolve catalog keys for one language.

    Lookup order: ``language``, then ``fallback_language``, then English,
    then the key itself.
    """

    __slots__ = ("_language", "_fallback_language")

    def __init__(
        self,
        language: Language | str = Language.en,
        fallback_language: Language | str = Language.en,
    ):
        object.__setattr__(self, "_language", Language(language))
        object.__setattr__(self, "_fallback_language", Language(fallback_language))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self) -> str:
        return (
            f"MessageResolver(language={self._language.value!r}, "
            f"fallback_language={self._fallback_language.value!r})"
        )

    @property
    def language(self) -> Language:
        return self._language

    @property
    def fallback_language(self) -> Language:
        return self._fallback_language

    def _template(self, key: str) -> str | None:
        for language in (self._language, self._fallback_language, Language.en):
            template = MESSAGES.get(language, {}).get(key)
            if template is not None:
                return template
        return None

    def t(self, key: str, **params: Any) -> str:
        """Translate ``key``, substituting ``${name}`` placeholders.

        Unknown placeholders are left as-is; an unknown key is returned
        unchanged.
        """
        template = self._template(key)
        if template is None:
            logger.warning(
                "Missing translation",
                key=str(key),
                language=self._language.value,
            )
            return str(key)
        return Template(template).safe_substitute(params)

    def render(self, notice: Notice) -> str:
        """Render a notice, resolving nested notice parameters first."""
        params = {
            name: self.render(value) if isinstance(value, Notice) else value
            for name, value in notice.params.items()
        }
        return self.t(notice.key, **params)

    def render_all(self, notices: Iterable[Notice]) -> list[str]:
        return [self.render(notice) for notice in notices]


_lock = threading.Lock()
_default = MessageResolver(settings.default_language, settings.fallback_language)


def configure(
    language: Language | str,
    fallback_language: Language | str | None = None,
) -> MessageResolver:
    """Replace the process-wide default resolver and return it."""
    global _default
    resolver = MessageResolver(
        language,
        fallback_language if fallback_language is not None else settings.fallback_language,
    )
    with _lock:
        _default = resolver
    logger.info(
        "Default language configured",
        language=resolver.language.value,
        fallback_language=resolver.fallback_language.value,
    )
    return resolver


def get_resolver() -> MessageResolver:
    with _lock:
        return _default


def get_language() -> Language:
    return get_resolver().language


def resolver_for(language: Language | str | None) -> MessageResolver:
    """Resolver for a per-request language, or the default when none is given."""
    if language is None:
        return get_resolver()
    return MessageResolver(language, get_resolver().fallback_language)


def t(key: str, **params: Any) -> str:
    """Translate with the default resolver."""
    return get_resolver().t(key, **params)
