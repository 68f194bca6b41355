"""
Component discovery for web pages.

Provides:
- ComponentExtractor: classification, filtering and locator synthesis
- HtmlDocument / SnapshotDocument: static and live DOM hosts
- PageAnalyzer: Playwright-driven live page analysis
"""

from aiscout.extractor.component_extractor import ComponentExtractor, classify, is_candidate
from aiscout.extractor.dom import ComputedStyle, HtmlDocument, SnapshotDocument
from aiscout.extractor.locators import hierarchical_locator, path_locator
from aiscout.extractor.page_capture import (
    AnalysisOptions,
    PageAnalyzer,
    analyze_html,
    capture_snapshot,
)

__all__ = [
    "AnalysisOptions",
    "ComponentExtractor",
    "ComputedStyle",
    "HtmlDocument",
    "PageAnalyzer",
    "SnapshotDocument",
    "analyze_html",
    "capture_snapshot",
    "classify",
    "hierarchical_locator",
    "is_candidate",
    "path_locator",
]
