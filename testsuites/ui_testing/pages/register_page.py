"""
================================================================================
Register Page Object (Async / Playwright)
================================================================================

Shopify customer registration (sauce-demo store, /account/register).

Notes:
    - Inputs are matched by their exact `customer[...]` names; wrapper <div>s
      on this theme reuse the input ids
    - The submit button is scoped to form#create_customer so the header search
      button is never hit
    - The theme intercepts button clicks (`data-login-with-shop-sign-up`);
      `submit_form` calls HTMLFormElement.submit() directly instead

================================================================================
"""

from __future__ import annotations

import re
from typing import Optional

import allure
from loguru import logger
from playwright.async_api import Page

from testsuites.ui_testing.framework.config_loader import SuiteSettings
from testsuites.ui_testing.framework.data_factory import RegistrationData
from testsuites.ui_testing.framework.evidence import EvidenceRecorder
from testsuites.ui_testing.framework.page_base import PageBase
from testsuites.ui_testing.framework.smart_locator import (
    AttributeContains,
    Css,
    ElementNotFoundError,
    ExactAttribute,
    FieldReference,
    InputType,
    SmartLocator,
)


FORM_SELECTOR = "form#create_customer"
REGISTER_URL_FRAGMENT = "/account/register"
SIGN_IN_URL = r"/account/login|/account/sign_in"

SUBMIT_NATIVELY = f"""() => {{
    const form = document.querySelector('{FORM_SELECTOR}');
    if (!form) {{ throw new Error('{FORM_SELECTOR} not found'); }}
    form.submit();
}}"""


class RegisterPage(PageBase):
    """Shopify registration page object (async)."""

    APP = "shopify"
    URL_PATH = "register"

    FORM = FieldReference.of("registration form", Css(FORM_SELECTOR))

    FIRST_NAME_INPUT = FieldReference.of(
        "first name input", ExactAttribute("name", "customer[first_name]")
    )
    LAST_NAME_INPUT = FieldReference.of(
        "last name input", ExactAttribute("name", "customer[last_name]")
    )
    EMAIL_INPUT = FieldReference.of(
        "email input", ExactAttribute("name", "customer[email]")
    )
    PASSWORD_INPUT = FieldReference.of(
        "password input", ExactAttribute("name", "customer[password]")
    )
    # Resolved inside the form only
    SUBMIT_BUTTON = FieldReference.of(
        "create account button",
        InputType("submit"),
        Css('button[type="submit"]'),
    )

    ERROR_MESSAGES = FieldReference.of(
        "registration errors",
        Css(".errors"),
        Css(".notice--error"),
        Css('[class*="error_message"]'),
    )
    SIGN_IN_LINK = FieldReference.of(
        "sign in link",
        AttributeContains("href", "login", tag="a"),
        AttributeContains("href", "sign_in", tag="a"),
    )
    SIGN_OUT_LINK = FieldReference.of(
        "sign out link",
        AttributeContains("href", "logout", tag="a"),
        AttributeContains("href", "sign_out", tag="a"),
    )

    def __init__(
        self,
        page: Page,
        settings: SuiteSettings,
        evidence: Optional[EvidenceRecorder] = None,
    ):
        super().__init__(page, settings, evidence)
        self.form_smart = SmartLocator(page.locator(FORM_SELECTOR), timeout=self.timeouts.action_ms)

    @allure.step("Open registration page")
    async def open(self) -> "RegisterPage":
        await self.navigate()
        return self

    @allure.step("Verify registration form is visible")
    async def expect_form_visible(self) -> None:
        await self.expect_visible(self.FORM)

    async def expect_fields_present(self) -> None:
        for ref in (self.FIRST_NAME_INPUT, self.LAST_NAME_INPUT, self.EMAIL_INPUT, self.PASSWORD_INPUT):
            await self.expect_visible(ref)
        try:
            await self.form_smart.resolve(self.SUBMIT_BUTTON, timeout=self.timeouts.assertion_ms)
        except ElementNotFoundError as e:
            raise AssertionError(
                f"Expected '{self.SUBMIT_BUTTON.intent}' inside {FORM_SELECTOR}; actual: not visible"
            ) from e

    @allure.step("Fill registration form")
    async def fill_registration(self, data: RegistrationData) -> None:
        """Only provided fields are typed; `None` leaves the input blank."""
        for ref, value in (
            (self.FIRST_NAME_INPUT, data.first_name),
            (self.LAST_NAME_INPUT, data.last_name),
            (self.EMAIL_INPUT, data.email),
            (self.PASSWORD_INPUT, data.password),
        ):
            if value is not None:
                await self.fill(ref, value)

    @allure.step("Submit registration form")
    async def submit_form(self) -> None:
        await self.page.evaluate(SUBMIT_NATIVELY)

    async def register(self, data: RegistrationData) -> None:
        await self.fill_registration(data)
        await self.submit_form()
        await self.wait_for_load("load")
        logger.info(f"Registration submitted for {data.email!r}; now at {self.page.url}")

    async def is_signed_in(self) -> bool:
        """A signed-in session shows a sign-out link; challenge and error pages do not."""
        return await self.is_visible_now(self.SIGN_OUT_LINK)

    async def has_visible_errors(self) -> bool:
        return await self.is_visible_now(self.ERROR_MESSAGES)

    async def has_error_text(self, pattern: str) -> bool:
        return await self.page.get_by_text(re.compile(pattern, re.IGNORECASE)).first.is_visible()

    def is_on_register_page(self) -> bool:
        return REGISTER_URL_FRAGMENT in self.page.url

    async def password_input_type(self) -> Optional[str]:
        return await self.field(self.PASSWORD_INPUT).get_attribute("type")

    @allure.step("Follow sign in link")
    async def go_to_sign_in(self) -> None:
        await self.expect_visible(self.SIGN_IN_LINK)
        await self.click(self.SIGN_IN_LINK)
        await self.wait_for_load("load")

    @allure.step("Verify sign in page")
    async def expect_on_sign_in(self) -> None:
        await self.expect_url_matches(SIGN_IN_URL)

    @allure.step("Sign out")
    async def sign_out(self) -> None:
        await self.click(self.SIGN_OUT_LINK)
        await self.wait_for_load("load")
