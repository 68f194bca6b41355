"""
Field extraction rules for generated scenario text.

Every scenario field is extracted by a named rule that either finds a value
in the segment or falls back to an explicit default. The outcome is tagged
so callers can tell the two apart.

Labels are matched on a single line, ``Label: value``, with markdown
emphasis and list bullets around the label tolerated:

    Title: Login with valid credentials
    **Öncelik:** Yüksek
    - Category: Security
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from aiscout.models import Priority, ScenarioStep

T = TypeVar("T")


@dataclass(frozen=True)
class Found(Generic[T]):
    """Value present in the source text."""

    value: T


@dataclass(frozen=True)
class Default(Generic[T]):
    """Value substituted because the source text had none."""

    value: T


PRIORITY_VOCABULARY: dict[str, Priority] = {
    "low": Priority.LOW,
    "medium": Priority.MEDIUM,
    "high": Priority.HIGH,
    "critical": Priority.CRITICAL,
    "düşük": Priority.LOW,
    "orta": Priority.MEDIUM,
    "yüksek": Priority.HIGH,
    "kritik": Priority.CRITICAL,
}

_EMPHASIS = r"(?:\*\*|__|\*|_)?"
_WORD = re.compile(r"[^\W\d_]+")
_STEP_LINE = re.compile(r"^[ \t]*(\d+)\.[ \t]*(.+?)[ \t]*$", re.MULTILINE)


def _label_pattern(labels: tuple[str, ...]) -> re.Pattern[str]:
    # Longest label first so "Expected Result" wins over "Result"
    alternatives = "|".join(
        r"[ \t]+".join(re.escape(part) for part in label.split())
        for label in sorted(labels, key=len, reverse=True)
    )
    return re.compile(
        rf"^[ \t]*(?:[-*•][ \t]+)?{_EMPHASIS}[ \t]*(?:{alternatives})[ \t]*"
        rf"(?::[ \t]*{_EMPHASIS}|{_EMPHASIS}[ \t]*:)[ \t]*(.+?)[ \t]*$",
        re.IGNORECASE | re.MULTILINE,
    )


@dataclass(frozen=True)
class FieldRule:
    """Extract one text field from a labeled line, else use ``default``.

    ``default`` may reference ``{position}``, the 1-based segment position.
    """

    name: str
    labels: tuple[str, ...]
    default: str
    pattern: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "pattern", _label_pattern(self.labels))

    def extract(self, segment: str, position: int = 1) -> Found[str] | Default[str]:
        match = self.pattern.search(segment)
        if match:
            value = match.group(1).strip().strip("*_").strip()
            if value:
                return Found(value)
        return Default(self.default.format(position=position))


@dataclass(frozen=True)
class PriorityRule:
    """Map the labeled priority onto the closed vocabulary; unknown is medium."""

    name: str
    labels: tuple[str, ...]
    default: Priority = Priority.MEDIUM
    label_rule: FieldRule = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "label_rule", FieldRule(self.name, self.labels, ""))

    def extract(self, segment: str, position: int = 1) -> Found[Priority] | Default[Priority]:
        raw = self.label_rule.extract(segment, position)
        if isinstance(raw, Found):
            word = _WORD.search(raw.value)
            if word and word.group(0).casefold() in PRIORITY_VOCABULARY:
                return Found(PRIORITY_VOCABULARY[word.group(0).casefold()])
        return Default(self.default)


@dataclass(frozen=True)
class StepsRule:
    """Collect numbered lines; the literal number is kept as the step number."""

    name: str
    fallback_action: str

    def extract(
        self, segment: str, position: int = 1
    ) -> Found[tuple[ScenarioStep, ...]] | Default[tuple[ScenarioStep, ...]]:
        steps = tuple(
            ScenarioStep(step_number=int(number), action=action)
            for number, action in _STEP_LINE.findall(segment)
        )
        if steps:
            return Found(steps)
        return Default((ScenarioStep(step_number=1, action=self.fallback_action),))


TITLE = FieldRule(
    "title",
    (
        "Title", "Scenario Title", "Scenario Name", "Scenario", "Name",
        "Başlık", "Senaryo Başlığı", "Senaryo Adı", "Senaryo", "Ad",
    ),
    "Test Scenario {position}",
)

DESCRIPTION = FieldRule(
    "description",
    ("Description", "Objective", "Goal", "Açıklama", "Amaç", "Hedef"),
    "",
)

EXPECTED_RESULT = FieldRule(
    "expected_result",
    (
        "Expected Result", "Expected Outcome", "Result",
        "Beklenen Sonuç", "Beklenen Çıktı", "Sonuç",
    ),
    "Test completes successfully",
)

CATEGORY = FieldRule(
    "category",
    ("Category", "Type", "Kategori", "Tür", "Tip"),
    "Functional",
)

PRIORITY = PriorityRule("priority", ("Priority", "Öncelik"))

STEPS = StepsRule("steps", "Steps could not be parsed")
