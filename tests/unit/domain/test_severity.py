from __future__ import annotations

"""
Unit tests for the Severity domain.

Verifies:
1. Ordering and stdlib level mapping.
2. Tolerant parsing of names and aliases.
3. Rejection of unknown names.
"""

import logging

import pytest

from splitlog.domain.errors import ConfigurationError
from splitlog.domain.severity import Severity


def test_severities_are_ordered() -> None:
    ordered = [
        Severity.VERBOSE, Severity.DEBUG, Severity.INFORMATION,
        Severity.WARNING, Severity.ERROR, Severity.FATAL,
    ]
    assert ordered == sorted(ordered)


def test_stdlib_level_mapping() -> None:
    assert Severity.DEBUG == logging.DEBUG
    assert Severity.INFORMATION == logging.INFO
    assert Severity.FATAL == logging.CRITICAL
    assert Severity.VERBOSE < logging.DEBUG


def test_labels() -> None:
    assert Severity.INFORMATION.label == "Information"
    assert Severity.VERBOSE.label == "Verbose"
    assert Severity.ERROR.short == "ERR"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Information", Severity.INFORMATION),
        ("info", Severity.INFORMATION),
        ("  WARN ", Severity.WARNING),
        ("critical", Severity.FATAL),
        ("trace", Severity.VERBOSE),
        ("Verbose", Severity.VERBOSE),
    ],
)
def test_parse_accepts_names_and_aliases(text: str, expected: Severity) -> None:
    assert Severity.parse(text) is expected


@pytest.mark.parametrize("text", ["", "loud", "INFO2"])
def test_parse_rejects_unknown_names(text: str) -> None:
    with pytest.raises(ConfigurationError):
        Severity.parse(text)


def test_from_level_rounds_down() -> None:
    assert Severity.from_level(logging.INFO + 5) is Severity.INFORMATION
    assert Severity.from_level(1) is Severity.VERBOSE
    assert Severity.from_level(100) is Severity.FATAL
