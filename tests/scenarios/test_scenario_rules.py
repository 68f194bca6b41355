"""
Tests for scenario field extraction rules.

These tests verify label matching, markdown tolerance, defaults and the
priority vocabulary.
"""

from __future__ import annotations

import pytest

from aiscout.models import Priority
from aiscout.scenarios import rules
from aiscout.scenarios.rules import Default, Found


class TestFieldRule:
    """Test FieldRule extraction."""

    @pytest.mark.parametrize(
        "line",
        [
            "Title: Login works",
            "**Title:** Login works",
            "**Title**: Login works",
            "- Title: Login works",
            "* **Title:** Login works",
            "  title:   Login works  ",
            "Scenario Title: Login works",
            "Başlık: Login works",
        ],
    )
    def test_label_variants(self, line: str) -> None:
        """Plain, emphasized, bulleted and Turkish labels all match."""
        assert rules.TITLE.extract(f"\n{line}\nDescription: x\n") == Found("Login works")

    def test_longest_label_wins(self) -> None:
        """'Expected Result' is not mistaken for a bare 'Result' label."""
        segment = "Expected Result: Dashboard shown\n"
        assert rules.EXPECTED_RESULT.extract(segment) == Found("Dashboard shown")

    def test_value_emphasis_is_stripped(self) -> None:
        """Trailing emphasis markers around the value are removed."""
        assert rules.CATEGORY.extract("Category: **Security**") == Found("Security")

    def test_label_must_start_a_line(self) -> None:
        """Labels in the middle of a sentence are not fields."""
        segment = "1. Check the Title: field is shown\n"
        assert rules.TITLE.extract(segment, position=3) == Default("Test Scenario 3")

    def test_defaults(self) -> None:
        """Missing fields fall back to their documented defaults."""
        assert rules.DESCRIPTION.extract("") == Default("")
        assert rules.EXPECTED_RESULT.extract("") == Default("Test completes successfully")
        assert rules.CATEGORY.extract("") == Default("Functional")

    def test_multiword_label_tolerates_spacing(self) -> None:
        """Multiword labels match with any run of spaces between words."""
        assert rules.EXPECTED_RESULT.extract("Expected   Result: ok") == Found("ok")

    def test_turkish_labels(self) -> None:
        """Turkish labels are recognized."""
        segment = "Açıklama: Giriş testi\nBeklenen Sonuç: Panel açılır\nKategori: Güvenlik\n"
        assert rules.DESCRIPTION.extract(segment) == Found("Giriş testi")
        assert rules.EXPECTED_RESULT.extract(segment) == Found("Panel açılır")
        assert rules.CATEGORY.extract(segment) == Found("Güvenlik")


class TestPriorityRule:
    """Test PriorityRule extraction."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("low", Priority.LOW),
            ("Medium", Priority.MEDIUM),
            ("HIGH", Priority.HIGH),
            ("critical - blocks release", Priority.CRITICAL),
            ("kritik", Priority.CRITICAL),
            ("Yüksek", Priority.HIGH),
            ("orta", Priority.MEDIUM),
            ("Düşük", Priority.LOW),
        ],
    )
    def test_vocabulary(self, value: str, expected: Priority) -> None:
        """English and Turkish priority words map onto the closed set."""
        assert rules.PRIORITY.extract(f"Priority: {value}") == Found(expected)

    def test_turkish_label(self) -> None:
        """Öncelik is accepted as the priority label."""
        assert rules.PRIORITY.extract("**Öncelik:** Kritik") == Found(Priority.CRITICAL)

    def test_unknown_word_defaults_to_medium(self) -> None:
        """Unrecognized priorities become medium."""
        assert rules.PRIORITY.extract("Priority: P1") == Default(Priority.MEDIUM)
        assert rules.PRIORITY.extract("Priority: urgent") == Default(Priority.MEDIUM)

    def test_missing_priority(self) -> None:
        """No priority line yields the default."""
        assert rules.PRIORITY.extract("Title: x") == Default(Priority.MEDIUM)


class TestStepsRule:
    """Test StepsRule extraction."""

    def test_numbered_lines(self) -> None:
        """Numbered lines become steps with their literal numbers."""
        segment = "Steps:\n  1. Open the page\n2.Click Login\nnot a step\n10. Done  \n"
        result = rules.STEPS.extract(segment)
        assert isinstance(result, Found)
        assert [(s.step_number, s.action) for s in result.value] == [
            (1, "Open the page"),
            (2, "Click Login"),
            (10, "Done"),
        ]

    def test_out_of_order_numbers_are_preserved(self) -> None:
        """Numbers are neither renumbered nor reordered."""
        result = rules.STEPS.extract("2. Do X\n1. Do Y\n")
        assert [(s.step_number, s.action) for s in result.value] == [(2, "Do X"), (1, "Do Y")]

    def test_fallback_step(self) -> None:
        """A segment without numbered lines gets one placeholder step."""
        result = rules.STEPS.extract("Title: nothing numbered")
        assert isinstance(result, Default)
        assert [(s.step_number, s.action) for s in result.value] == [(1, "Steps could not be parsed")]
