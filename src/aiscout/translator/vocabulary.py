"""
Keyword tables driving step classification and element resolution.

Matching is a case-folded substring test. Table order is precedence order:
the first action whose keyword set hits the step text wins. Adding a
language means adding keywords, never new control flow.
"""

from __future__ import annotations

import re
from enum import StrEnum

from aiscout.models import ComponentType


class ActionCategory(StrEnum):
    """What a natural-language step asks the browser to do."""

    NAVIGATE = "navigate"
    CLICK = "click"
    FILL = "fill"
    SELECT = "select"
    CHECK = "check"
    VERIFY = "verify"
    WAIT = "wait"
    UNKNOWN = "unknown"


# English and Turkish cues per action, in precedence order
ACTION_KEYWORDS: tuple[tuple[ActionCategory, frozenset[str]], ...] = (
    (ActionCategory.NAVIGATE, frozenset({
        "navigate", "go to", "visit", "open the page",
        "sayfaya git", "sayfasına git", "ana sayfa",
    })),
    (ActionCategory.CLICK, frozenset({
        "click", "press",
        "tıkla", "bas",
    })),
    (ActionCategory.FILL, frozenset({
        "enter", "type", "fill",
        "gir", "yaz",
    })),
    (ActionCategory.SELECT, frozenset({
        "select", "choose",
        "seç",
    })),
    (ActionCategory.CHECK, frozenset({
        "check", "tick",
        "işaretle",
    })),
    (ActionCategory.VERIFY, frozenset({
        "verify", "assert", "ensure", "confirm",
        "doğrula", "kontrol",
    })),
    (ActionCategory.WAIT, frozenset({
        "wait",
        "bekle",
    })),
)

# Component type the resolver should look for per action
ACTION_TARGET_TYPES: dict[ActionCategory, ComponentType] = {
    ActionCategory.CLICK: ComponentType.BUTTON,
    ActionCategory.FILL: ComponentType.INPUT,
    ActionCategory.SELECT: ComponentType.SELECT,
    ActionCategory.CHECK: ComponentType.CHECKBOX,
}

# Domain terms used to match step text against component labels, in order
RESOLVER_KEYWORDS: tuple[str, ...] = (
    "email",
    "şifre",
    "password",
    "kullanıcı",
    "username",
    "giriş",
    "login",
    "ara",
    "search",
    "kayıt",
    "register",
    "sepet",
    "cart",
    "ürün",
    "product",
)

EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")

# Canned values for text entry, first matching keyword set wins
FILL_VALUES: tuple[tuple[frozenset[str], str], ...] = (
    (frozenset({"email", "e-posta"}), "test@example.com"),
    (frozenset({"şifre", "password"}), "TestPassword123!"),
    (frozenset({"kullanıcı", "username"}), "testuser"),
)

DEFAULT_FILL_VALUE = "test value"

WAIT_TIMEOUT_MS = 2000
SELECT_OPTION_INDEX = 1


def classify_step(step_text: str) -> ActionCategory:
    """Return the first action category whose cue appears in ``step_text``."""
    text = step_text.casefold()
    for category, keywords in ACTION_KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return category
    return ActionCategory.UNKNOWN


def fill_value(step_text: str) -> str:
    """Value to type for a text-entry step.

    A literal email address in the step wins, then a canned value for a
    recognized field keyword, then a generic placeholder.
    """
    email = EMAIL_PATTERN.search(step_text)
    if email:
        return email.group(0)
    text = step_text.casefold()
    for keywords, value in FILL_VALUES:
        if any(keyword in text for keyword in keywords):
            return value
    return DEFAULT_FILL_VALUE
