"""
Live page analysis with Playwright.

Provides:
- Navigation with network-idle wait and optional selector wait
- Single-call DOM snapshot (computed styles, live values, selector matches)
- Component extraction over the snapshot
- Batch analysis where one failing URL does not abort the rest
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from pydantic import BaseModel, ConfigDict, Field, field_validator

from aiscout.errors import AIScoutError, ExtractionError, PageCaptureError
from aiscout.extractor.component_extractor import ComponentExtractor
from aiscout.extractor.dom import HtmlDocument, SnapshotDocument
from aiscout.models import AnalysisResult, BatchAnalysisResult

if TYPE_CHECKING:
    from playwright.async_api import Page

logger = structlog.get_logger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

# Serializes the document in one round trip. Exclusion selectors are
# evaluated in the page; selectors the browser rejects are reported back.
SNAPSHOT_SCRIPT = """
(excludeSelectors) => {
    const valid = [];
    const invalidSelectors = [];
    for (const selector of excludeSelectors) {
        try {
            document.documentElement.matches(selector);
            valid.push(selector);
        } catch (e) {
            invalidSelectors.push({ selector, error: String(e.message || e) });
        }
    }

    const describe = (el) => {
        const style = window.getComputedStyle(el);
        const attributes = {};
        for (const attr of Array.from(el.attributes)) {
            attributes[attr.name] = attr.value;
        }
        const properties = {};
        if (typeof el.value === 'string') properties.value = el.value;
        if (el.tagName === 'INPUT') properties.type = el.type;
        if (typeof el.href === 'string') properties.href = el.href;
        if (typeof el.src === 'string') properties.src = el.src;

        return {
            tag: el.tagName.toLowerCase(),
            attributes,
            properties,
            display: style.display,
            visibility: style.visibility,
            matched: valid.filter((selector) => el.matches(selector)),
            children: [],
        };
    };

    // Iterative; nesting depth is unbounded
    const serialize = (rootEl) => {
        const root = describe(rootEl);
        const stack = [[rootEl, root]];
        while (stack.length) {
            const [el, node] = stack.pop();
            for (const child of el.childNodes) {
                if (child.nodeType === Node.ELEMENT_NODE) {
                    const childNode = describe(child);
                    node.children.push(childNode);
                    stack.push([child, childNode]);
                } else if (child.nodeType === Node.TEXT_NODE || child.nodeType === Node.CDATA_SECTION_NODE) {
                    node.children.push(child.textContent);
                }
            }
        }
        return root;
    };

    return {
        url: window.location.href,
        title: document.title,
        invalidSelectors,
        root: document.documentElement ? serialize(document.documentElement) : null,
    };
}
"""


class AnalysisOptions(BaseModel):
    """Options for analyzing one page."""

    model_config = ConfigDict(frozen=True)

    url: str = ""
    wait_for_selector: str | None = None
    timeout_ms: int = Field(default=30000, ge=1000, le=300000)
    exclude_selectors: tuple[str, ...] = ()
    include_hidden: bool = False

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Require an absolute http(s) or file URL when one is given."""
        v = v.strip()
        if v and not v.startswith(("http://", "https://", "file://")):
            raise ValueError("url must start with http://, https:// or file://")
        return v


def analyze_html(
    html: str,
    url: str,
    exclude_selectors: list[str] | tuple[str, ...] = (),
    include_hidden: bool = False,
) -> AnalysisResult:
    """Analyze static HTML as if it had been loaded from ``url``."""
    document = HtmlDocument(html, base_url=url or None)
    inventory = ComponentExtractor(exclude_selectors, include_hidden).extract(document)
    return AnalysisResult.from_inventory(url, document.title, inventory)


async def capture_snapshot(page: Page | None, exclude_selectors: tuple[str, ...] = ()) -> SnapshotDocument:
    """Serialize the current DOM of ``page``."""
    if page is None:
        raise ExtractionError("No page available for component extraction")
    data: dict[str, Any] = await page.evaluate(SNAPSHOT_SCRIPT, list(exclude_selectors))
    if not data or not data.get("root"):
        raise ExtractionError("Page has no document element")
    return SnapshotDocument(data)


class PageAnalyzer:
    """
    Analyze live pages with a Playwright browser.

    A new browser context is created per analysis and the browser is always
    closed, even when navigation fails.
    """

    def __init__(
        self,
        headless: bool = True,
        browser: str = "chromium",
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self._headless = headless
        self._browser_name = browser
        self._user_agent = user_agent
        self._log = logger.bind(component="page_analyzer")

    async def analyze_page(self, page: Page | None, options: AnalysisOptions) -> AnalysisResult:
        """Navigate ``page`` to ``options.url`` and extract its components."""
        if page is None:
            raise ExtractionError("No page available for component extraction")

        self._log.info("Analyzing page", url=options.url)
        try:
            await page.goto(options.url, wait_until="networkidle", timeout=options.timeout_ms)
            if options.wait_for_selector:
                await page.wait_for_selector(options.wait_for_selector, timeout=options.timeout_ms)
            title = await page.title()
        except Exception as e:
            raise PageCaptureError(f"Failed to load page: {e}", url=options.url) from e

        try:
            document = await capture_snapshot(page, options.exclude_selectors)
        except AIScoutError:
            raise
        except Exception as e:
            raise PageCaptureError(f"Failed to snapshot page: {e}", url=options.url) from e

        inventory = ComponentExtractor(options.exclude_selectors, options.include_hidden).extract(document)

        self._log.info(
            "Page analysis complete",
            url=options.url,
            title=title,
            components=inventory.statistics.total_components,
        )
        return AnalysisResult.from_inventory(options.url, title, inventory)

    async def analyze(self, options: AnalysisOptions) -> AnalysisResult:
        """Launch a browser, analyze one page and close the browser."""
        from playwright.async_api import async_playwright

        async with async_playwright() as playwright:
            browser_type = getattr(playwright, self._browser_name)
            browser = await browser_type.launch(headless=self._headless)
            try:
                context = await browser.new_context(user_agent=self._user_agent)
                page = await context.new_page()
                return await self.analyze_page(page, options)
            finally:
                await browser.close()

    async def analyze_many(self, urls: list[str], options: AnalysisOptions) -> BatchAnalysisResult:
        """Analyze several URLs with shared options, collecting failures per URL."""
        results: list[AnalysisResult] = []
        errors: list[dict[str, str]] = []

        for url in urls:
            try:
                page_options = AnalysisOptions.model_validate({**options.model_dump(), "url": url})
                results.append(await self.analyze(page_options))
            except Exception as e:
                self._log.warning("Page analysis failed", url=url, error=str(e))
                errors.append({"url": url, "error": str(e)})

        self._log.info("Batch analysis complete", succeeded=len(results), failed=len(errors))
        return BatchAnalysisResult(results=tuple(results), errors=tuple(errors))
