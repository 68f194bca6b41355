"""
Scenario step to Playwright code translation.

Provides:
- StepTranslator: one step to code lines
- SelectorResolver: keyword cues to inventory locators
- PlaywrightScriptWriter: complete test files (TypeScript or Python)
"""

from aiscout.translator.dialects import (
    CodeDialect,
    DialectName,
    PythonDialect,
    TypeScriptDialect,
    get_dialect,
)
from aiscout.translator.resolver import SelectorResolver
from aiscout.translator.script_writer import PlaywrightScriptWriter, script_filename
from aiscout.translator.translator import StepTranslator, validate_base_url
from aiscout.translator.vocabulary import ActionCategory, classify_step, fill_value

__all__ = [
    "ActionCategory",
    "CodeDialect",
    "DialectName",
    "PlaywrightScriptWriter",
    "PythonDialect",
    "SelectorResolver",
    "StepTranslator",
    "TypeScriptDialect",
    "classify_step",
    "fill_value",
    "get_dialect",
    "script_filename",
    "validate_base_url",
]
