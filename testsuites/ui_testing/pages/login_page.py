"""
================================================================================
Login Page Object (Async / Playwright)
================================================================================

FinChoice customer login. The application root redirects
(/Reloan/CustomerLanding -> /Account/Login) to this form.

Design goals:
  - Intent-based fields resolved through SmartLocator (ordered strategies)
  - Credentials passed in explicitly; nothing read from the environment here
  - Login -> logout round trip observable through the login form itself

================================================================================
"""

from __future__ import annotations

import allure
from loguru import logger

from testsuites.ui_testing.framework.data_factory import Credentials
from testsuites.ui_testing.framework.page_base import PageBase
from testsuites.ui_testing.framework.smart_locator import (
    AttributeContains,
    Css,
    ExactAttribute,
    FieldReference,
    InputType,
    Role,
    Text,
)


class LoginPage(PageBase):
    """FinChoice login page object (async)."""

    APP = "finchoice"
    URL_PATH = "home"

    USERNAME_INPUT = FieldReference.of(
        "username input",
        ExactAttribute("name", "username"),
        AttributeContains("id", "user"),
        AttributeContains("placeholder", "username"),
        AttributeContains("placeholder", "email"),
        InputType("text"),
    )
    PASSWORD_INPUT = FieldReference.of(
        "password input",
        InputType("password"),
    )
    LOGIN_BUTTON = FieldReference.of(
        "login button",
        Css('button[type="submit"]'),
        Css('input[type="submit"]'),
        Text("Login", tag="button"),
        Text("Sign in", tag="button"),
        Text("Log in", tag="button"),
    )
    ERROR_MESSAGE = FieldReference.of(
        "login error message",
        Css('[role="alert"]'),
        Css('[class*="error"]'),
        Css('[class*="alert"]'),
    )
    LOGOUT_LINK = FieldReference.of(
        "logout link",
        AttributeContains("href", "logout", tag="a"),
        AttributeContains("href", "signout", tag="a"),
        Role("link", name="Log out"),
        Text("Logout", tag="a"),
        Text("Sign out", tag="a"),
        Text("Logout", tag="button"),
    )

    @allure.step("Open login page")
    async def open(self) -> "LoginPage":
        await self.navigate()
        return self

    @allure.step("Verify login form is displayed")
    async def expect_form_displayed(self) -> None:
        await self.expect_visible(self.USERNAME_INPUT)
        await self.expect_visible(self.PASSWORD_INPUT)
        await self.expect_visible(self.LOGIN_BUTTON)

    @allure.step("Login")
    async def login(self, credentials: Credentials) -> None:
        """Fill username then password, then submit."""
        logger.info(f"Logging in as: {credentials.username}")
        await self.field(self.USERNAME_INPUT).wait_for()
        await self.fill(self.USERNAME_INPUT, credentials.username)
        await self.fill(self.PASSWORD_INPUT, credentials.password)
        await self.click(self.LOGIN_BUTTON)

    @allure.step("Wait until authenticated")
    async def wait_until_authenticated(self, timeout: int = 15000) -> None:
        """Block until the URL no longer points at a login page."""
        await self.page.wait_for_url(lambda url: "login" not in url.lower(), timeout=timeout)
        logger.info(f"Authenticated, landed on: {self.page.url}")

    @allure.step("Login and wait for landing page")
    async def login_as(self, credentials: Credentials) -> None:
        await self.open()
        await self.login(credentials)
        await self.wait_until_authenticated(timeout=self.timeouts.navigation_ms)

    @allure.step("Verify login error is displayed")
    async def expect_login_error(self) -> None:
        await self.expect_visible(self.ERROR_MESSAGE, message="Invalid credentials should show an error")

    @allure.step("Logout")
    async def logout(self) -> None:
        await self.click(self.LOGOUT_LINK)
        await self.wait_for_load()

    @allure.step("Verify unauthenticated state")
    async def expect_unauthenticated(self) -> None:
        """The login form is what an anonymous visitor sees."""
        await self.open()
        await self.expect_form_displayed()
        await self.expect_url_matches(r"login")
