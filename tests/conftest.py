"""Pytest fixtures for AIScout tests."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Generator

import pytest

from aiscout.extractor import analyze_html
from aiscout.models import AnalysisResult, ComponentType, InventoryItem


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test artifacts."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def login_page_html() -> str:
    """Sample login page with a mix of visible, hidden and excluded elements."""
    return """<!DOCTYPE html>
<html>
<head>
  <title>Shop Login</title>
  <script>var tracking = true;</script>
</head>
<body>
  <header class="site-header main">
    <a href="/cart" class="nav-link">Sepet</a>
    <img src="/logo.png" alt="Shop logo">
  </header>
  <div class="cookie-banner">
    <button class="accept">Accept cookies</button>
  </div>
  <main>
    <h1>Giriş</h1>
    <form id="login-form" action="/login">
      <label for="email">Email</label>
      <input type="email" name="email" placeholder="Email adresi">
      <input type="password" name="password" placeholder="Şifre">
      <input type="checkbox" name="remember">
      <select name="lang"><option value="tr">Türkçe</option><option value="en" selected>English</option></select>
      <input type="hidden" name="csrf" value="abc">
      <button id="login-btn" class="btn btn-primary large" type="submit">Giriş Yap</button>
    </form>
    <button style="display: none">Hidden action</button>
    <div role="button" onclick="go()">Custom</div>
  </main>
</body>
</html>
"""


@pytest.fixture
def login_analysis(login_page_html: str) -> AnalysisResult:
    """Analysis of the sample login page, excluding the cookie banner."""
    return analyze_html(login_page_html, "https://shop.example.com/login", exclude_selectors=[".cookie-banner *"])


@pytest.fixture
def sample_components() -> list[InventoryItem]:
    """Hand-built inventory used by resolver and translator tests."""
    return [
        InventoryItem(
            id="component-0",
            type=ComponentType.INPUT,
            tag_name="input",
            placeholder="Email adresi",
            input_type="email",
            name="email",
            hierarchical_locator="form#login > input.email",
            path_locator="/html/body/form/input",
        ),
        InventoryItem(
            id="component-1",
            type=ComponentType.INPUT,
            tag_name="input",
            placeholder="Şifre",
            input_type="password",
            name="password",
            hierarchical_locator="",
            path_locator="/html/body/form/input[2]",
        ),
        InventoryItem(
            id="component-2",
            type=ComponentType.BUTTON,
            tag_name="button",
            text="Ara",
            hierarchical_locator="#search-btn",
            path_locator='//*[@id="search-btn"]',
        ),
        InventoryItem(
            id="component-3",
            type=ComponentType.BUTTON,
            tag_name="button",
            text="Giriş Yap",
            hierarchical_locator="#login-btn",
            path_locator='//*[@id="login-btn"]',
        ),
        InventoryItem(
            id="component-4",
            type=ComponentType.SELECT,
            tag_name="select",
            name="lang",
            hierarchical_locator="select.lang",
            path_locator="/html/body/form/select",
        ),
    ]


@pytest.fixture
def sample_scenario_text() -> str:
    """Generated text with a preamble, markdown emphasis and two scenarios."""
    return """Here are the test scenarios you asked for:

**Scenario 1**
**Title:** Successful login
**Description:** User logs in with valid credentials
Steps:
1. Navigate to the login page
2. Enter email address in the email field
3. Enter password in the password field
4. Click the Giriş Yap button
**Expected Result:** User is redirected to the dashboard
**Priority:** High
**Category:** Authentication

Scenario 2
- Title: Search for a product
Steps:
2. Type laptop into the search box
1. Click the Ara button
Expected Result: Matching products are listed
Priority: kritik
"""
