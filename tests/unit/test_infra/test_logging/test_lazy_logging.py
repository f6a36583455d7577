"""Tests for lazy log evaluation."""

from __future__ import annotations

import logging

import pytest

from pathtree.infra.logging import LazyString, get_lazy_logger, lazy


@pytest.mark.unit
class TestLazyLoggerAdapter:
    """Callables are evaluated only for enabled levels."""

    def test_disabled_level_skips_evaluation(self, caplog):
        calls = []
        logger = get_lazy_logger("tests.lazy.disabled")

        with caplog.at_level(logging.INFO, logger="tests.lazy.disabled"):
            logger.debug(lambda: calls.append("msg") or "expensive")

        assert calls == []
        assert caplog.records == []

    def test_enabled_level_evaluates_message(self, caplog):
        logger = get_lazy_logger("tests.lazy.enabled")

        with caplog.at_level(logging.DEBUG, logger="tests.lazy.enabled"):
            logger.debug(lambda: "built lazily")

        assert caplog.messages == ["built lazily"]

    def test_callable_arguments(self, caplog):
        logger = get_lazy_logger("tests.lazy.args")

        with caplog.at_level(logging.INFO, logger="tests.lazy.args"):
            logger.info("rewrote %s rows", lambda: 3)

        assert caplog.messages == ["rewrote 3 rows"]

    def test_explicit_level(self, caplog):
        logger = get_lazy_logger("tests.lazy.level")

        with caplog.at_level(logging.WARNING, logger="tests.lazy.level"):
            logger.log(logging.WARNING, lambda: "warned")
            logger.log(logging.INFO, lambda: "hidden")

        assert caplog.messages == ["warned"]

    def test_bound_context(self):
        logger = get_lazy_logger("tests.lazy.context", model="Category")

        assert logger.extra == {"model": "Category"}


@pytest.mark.unit
def test_lazy_string_defers_until_str():
    calls = []
    value = lazy(lambda: calls.append(1) or "rendered")

    assert isinstance(value, LazyString)
    assert calls == []
    assert str(value) == "rendered"
    assert calls == [1]
