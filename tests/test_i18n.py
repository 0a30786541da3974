"""Tests for the message catalog and resolver."""

import logging

import pytest

from mdi_advisor.core.enums import Language, MessageKey
from mdi_advisor.core.models import Notice
from mdi_advisor.i18n import (
    MESSAGES,
    MessageResolver,
    configure,
    get_language,
    get_resolver,
    resolver_for,
    t,
)


@pytest.fixture
def restore_default_resolver():
    """Put the process-wide resolver back after a test reconfigures it."""
    original = get_resolver()
    yield
    configure(original.language, original.fallback_language)


class TestCatalog:
    @pytest.mark.parametrize("language", list(Language))
    def test_every_key_translated(self, language):
        missing = [key for key in MessageKey if key not in MESSAGES[language]]
        assert missing == []


class TestMessageResolver:
    """Tests for key resolution and substitution."""

    def test_substitutes_params(self):
        resolver = MessageResolver(Language.en)
        text = resolver.t(MessageKey.correction_wait_3_hours, hours=1.5)
        assert "1.5 hours" in text

    def test_spanish(self):
        resolver = MessageResolver("es")
        assert resolver.t(MessageKey.period_morning) == "mañana"

    def test_unknown_placeholder_left_intact(self):
        resolver = MessageResolver()
        text = resolver.t(MessageKey.correction_wait_3_hours)
        assert "${hours}" in text

    def test_missing_key_returns_key_and_logs(self, caplog):
        resolver = MessageResolver(Language.es)

        with caplog.at_level(logging.WARNING, logger="mdi_advisor.i18n.resolver"):
            assert resolver.t("does.notExist") == "does.notExist"

        assert "Missing translation" in caplog.text

    def test_falls_back_to_english(self, monkeypatch):
        spanish = dict(MESSAGES[Language.es])
        del spanish[MessageKey.period_night]
        monkeypatch.setitem(MESSAGES, Language.es, spanish)

        assert MessageResolver(Language.es).t(MessageKey.period_night) == "night"

    def test_renders_nested_notice(self):
        notice = Notice(
            key=MessageKey.patterns_recurring_hypos,
            params={"period": Notice(key=MessageKey.period_night), "hour": 3},
        )

        assert MessageResolver(Language.en).render(notice) == (
            "Recurring hypoglycemias in the night (around 3:00)"
        )
        assert "noche" in MessageResolver(Language.es).render(notice)

    def test_render_all(self):
        notices = [Notice(key=MessageKey.alcohol), Notice(key=MessageKey.stress)]
        assert len(MessageResolver().render_all(notices)) == 2

    def test_is_immutable(self):
        resolver = MessageResolver()
        with pytest.raises(AttributeError):
            resolver.language = Language.es

    def test_rejects_unknown_language(self):
        with pytest.raises(ValueError):
            MessageResolver("fr")


class TestDefaultResolver:
    """Tests for the process-wide default."""

    def test_configure_switches_language(self, restore_default_resolver):
        configure(Language.es)

        assert get_language() == Language.es
        assert t(MessageKey.period_afternoon) == "tarde"

    def test_resolver_for_request_language(self, restore_default_resolver):
        configure(Language.en)

        assert resolver_for(None) is get_resolver()
        assert resolver_for(Language.es).language == Language.es
