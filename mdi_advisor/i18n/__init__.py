"""Localised rendering of engine notices (English and Spanish)."""

from mdi_advisor.i18n.messages import MESSAGES
from mdi_advisor.i18n.resolver import (
    MessageResolver,
    configure,
    get_language,
    get_resolver,
    resolver_for,
    t,
)

__all__ = [
    "MESSAGES",
    "MessageResolver",
    "configure",
    "get_language",
    "get_resolver",
    "resolver_for",
    "t",
]
