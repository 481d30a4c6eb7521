"""
================================================================================
Base Page Object
================================================================================

Foundation class for Page Object Model implementation.

Provides:
    - Navigation against an explicitly configured application
    - Intent-based element interaction through SmartLocator
    - Bounded assertion helpers with expected-vs-actual diagnostics
    - Evidence capture and locator health reporting

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
from typing import Any, Optional, Pattern, Union

import allure
from loguru import logger
from playwright.async_api import Page, expect

from .config_loader import AppSettings, SuiteSettings
from .element_actions import ElementActions, SelectionResult
from .evidence import EvidenceRecord, EvidenceRecorder
from .smart_locator import ElementNotFoundError, FieldHandle, FieldReference, SmartLocator


UrlPattern = Union[str, Pattern[str]]


def _as_pattern(pattern: UrlPattern) -> Pattern[str]:
    if isinstance(pattern, str):
        return re.compile(pattern, re.IGNORECASE)
    return pattern


class BasePage:
    """
    Base class for all page objects.

    Usage:
        class LoginPage(BasePage):
            APP = "finchoice"
            URL_PATH = "home"

            USERNAME = FieldReference.of("username input", ExactAttribute("name", "username"))

            async def login(self, credentials):
                await self.fill(self.USERNAME, credentials.username)
    """

    # Override in subclasses
    APP: str = "finchoice"
    URL_PATH: str = "/"

    def __init__(
        self,
        page: Page,
        settings: SuiteSettings,
        evidence: Optional[EvidenceRecorder] = None,
    ):
        """
        Initialize page object.

        Args:
            page: Playwright Page object
            settings: Suite configuration (base URLs, timeouts)
            evidence: Optional recorder used by `capture`
        """
        self.page = page
        self.settings = settings
        self.app: AppSettings = settings.app(self.APP)
        self.timeouts = settings.timeouts
        self.evidence = evidence
        self.smart = SmartLocator(page, timeout=self.timeouts.action_ms)
        self.actions = ElementActions(self.smart)

    @property
    def url(self) -> str:
        """Get full page URL."""
        return self.app.url_for(self.URL_PATH)

    async def navigate(self, wait_for: str = "domcontentloaded") -> None:
        """
        Navigate to this page.

        Args:
            wait_for: Wait condition - 'load', 'domcontentloaded', 'networkidle'
        """
        await self.navigate_to(self.URL_PATH, wait_for=wait_for)

    async def navigate_to(self, path: str, wait_for: str = "domcontentloaded") -> None:
        """
        Navigate to a named path of this page's application (or a literal path).
        """
        full_url = self.app.url_for(path)
        with allure.step(f"Navigate to {full_url}"):
            await self.page.goto(
                full_url,
                wait_until=wait_for,
                timeout=self.timeouts.navigation_ms,
            )
            logger.debug(f"Navigated to: {full_url}")

    async def wait_for_load(self, state: str = "domcontentloaded", timeout: Optional[int] = None) -> None:
        await self.page.wait_for_load_state(state, timeout=timeout or self.timeouts.navigation_ms)

    async def pause(self, milliseconds: int) -> None:
        """Fixed delay, e.g. to let client-side validation render."""
        await self.page.wait_for_timeout(milliseconds)

    # =========================================================================
    # Intent-based Element Interactions
    # =========================================================================

    def field(self, ref: FieldReference) -> FieldHandle:
        return self.smart.handle(ref)

    async def fill(self, ref: FieldReference, value: str, timeout: Optional[int] = None) -> None:
        shown = "*" * len(value) if "password" in ref.intent.lower() else value
        with allure.step(f"Fill {ref.intent}: {shown}"):
            await self.smart.fill(ref, value, timeout=timeout)

    async def click(self, ref: FieldReference, timeout: Optional[int] = None, **kwargs: Any) -> None:
        with allure.step(f"Click: {ref.intent}"):
            await self.smart.click(ref, timeout=timeout, **kwargs)

    async def select(self, ref: FieldReference, label: str, timeout: Optional[int] = None) -> SelectionResult:
        return await self.actions.select_option_by_label(ref, label, timeout=timeout)

    async def is_visible(self, ref: FieldReference, timeout: int = 2000) -> bool:
        return await self.smart.is_visible(ref, timeout=timeout)

    async def is_visible_now(self, ref: FieldReference) -> bool:
        """Snapshot check with no waiting: does any strategy match a visible element?"""
        return await self.smart.collect(ref).filter(visible=True).count() > 0

    # =========================================================================
    # Assertions
    # =========================================================================

    async def expect_visible(
        self,
        ref: FieldReference,
        timeout: Optional[int] = None,
        message: str = "",
    ) -> None:
        """
        Assert that `ref` becomes visible within the bound.

        Raises:
            AssertionError: With the intent, the bound and the current URL
        """
        timeout = self.timeouts.assertion_ms if timeout is None else timeout
        try:
            await self.smart.resolve(ref, timeout=timeout)
        except ElementNotFoundError as e:
            detail = f"{message}\n" if message else ""
            raise AssertionError(
                f"{detail}Expected '{ref.intent}' to be visible within {timeout} ms; "
                f"actual: not visible (url={self.page.url})\n{e}"
            ) from e

    async def expect_hidden_count(self, ref: FieldReference, count: int = 0, timeout: Optional[int] = None) -> None:
        """Assert that exactly `count` elements match the strategies of `ref`."""
        timeout = self.timeouts.assertion_ms if timeout is None else timeout
        await expect(self.smart.collect(ref)).to_have_count(count, timeout=timeout)

    async def expect_no_matches(self, ref: FieldReference, timeout: Optional[int] = None) -> None:
        """Assert that no element matches any strategy of `ref`."""
        await self.expect_hidden_count(ref, 0, timeout=timeout)

    async def expect_url_contains(self, fragment: str, timeout: Optional[int] = None) -> None:
        await self.expect_url_matches(re.escape(fragment), timeout=timeout)

    async def expect_url_matches(self, pattern: UrlPattern, timeout: Optional[int] = None) -> None:
        timeout = self.timeouts.assertion_ms if timeout is None else timeout
        await expect(self.page).to_have_url(_as_pattern(pattern), timeout=timeout)

    async def expect_url_not_matches(self, pattern: UrlPattern, timeout: Optional[int] = None) -> None:
        timeout = self.timeouts.assertion_ms if timeout is None else timeout
        await expect(self.page).not_to_have_url(_as_pattern(pattern), timeout=timeout)

    async def expect_title(self, pattern: UrlPattern = r".+") -> None:
        await expect(self.page).to_have_title(_as_pattern(pattern), timeout=self.timeouts.assertion_ms)

    # =========================================================================
    # Evidence and Debug Utilities
    # =========================================================================

    async def capture(self, scenario_id: str, step_id: str) -> EvidenceRecord:
        """Save a full-page screenshot for (scenario_id, step_id)."""
        if self.evidence is None:
            raise RuntimeError(f"{type(self).__name__} was created without an EvidenceRecorder")
        return await self.evidence.capture(scenario_id, step_id)

    def get_locator_health_report(self) -> str:
        return self.smart.get_health_report()


__all__ = [
    "BasePage",
    "PageBase",
]

# Backward-compatible alias (many Page Objects prefer PageBase naming)
PageBase = BasePage
