"""
================================================================================
Forgot Password Page Object (Async / Playwright)
================================================================================

FinChoice password recovery:
    - Login page (/Account/Login) exposes a "Forgot Password" link
    - /ForgotPassword asks for cell number (#txtCellNumber) and SA ID (#txtIDNumber)
    - "Back" returns to /login

================================================================================
"""

from __future__ import annotations

import allure

from testsuites.ui_testing.framework.data_factory import ForgotPasswordData
from testsuites.ui_testing.framework.page_base import PageBase
from testsuites.ui_testing.framework.smart_locator import (
    AttributeContains,
    Css,
    ExactAttribute,
    FieldReference,
    Text,
)


LOGIN_URL_MARKERS = ("/account/login", "/uat1/login")


class ForgotPasswordPage(PageBase):
    """Forgot Password page object (async)."""

    APP = "finchoice"
    URL_PATH = "forgot_password"

    # Login page
    FORGOT_PASSWORD_LINK = FieldReference.of(
        "forgot password link",
        AttributeContains("href", "ForgotPassword", tag="a"),
        Text("Forgot Password", tag="a"),
    )

    # Forgot Password page (ids/names from the live DOM)
    CELL_NUMBER_INPUT = FieldReference.of(
        "cell number input",
        Css("#txtCellNumber"),
        ExactAttribute("name", "MobileNumber"),
    )
    ID_NUMBER_INPUT = FieldReference.of(
        "ID number input",
        Css("#txtIDNumber"),
        ExactAttribute("name", "IdNumber"),
    )
    NEXT_BUTTON = FieldReference.of(
        "next button",
        Css('button[type="submit"]:has-text("Next")'),
        Text("Next", tag="button"),
    )
    BACK_TO_LOGIN_LINK = FieldReference.of(
        "back to login link",
        AttributeContains("href", "/uat1/login", tag="a"),
        Text("Back", tag="a"),
    )
    ERROR_MESSAGE = FieldReference.of(
        "forgot password error",
        Css(".validation-summary-errors"),
        Css("[data-valmsg-for]"),
        Css(".field-validation-error"),
        Css('[class*="error" i]:not(script)'),
        Css('[role="alert"]'),
    )
    SUCCESS_MESSAGE = FieldReference.of(
        "reset confirmation",
        Css(".alert-success"),
        Css('[class*="success" i]'),
        Text("sent", tag="p"),
        Text("reset", tag="p"),
        Text("reset link", tag="div"),
    )

    @allure.step("Open login page")
    async def goto_login(self) -> None:
        await self.navigate_to("login")

    @allure.step("Open Forgot Password page")
    async def goto_forgot_password(self) -> None:
        await self.navigate()

    @allure.step("Follow 'Forgot Password' link from login page")
    async def open_from_login(self) -> None:
        await self.field(self.FORGOT_PASSWORD_LINK).wait_for(timeout=self.timeouts.navigation_ms)
        await self.click(self.FORGOT_PASSWORD_LINK)
        await self.wait_for_load()

    @allure.step("Verify cell and ID fields are visible")
    async def expect_fields_visible(self) -> None:
        await self.expect_visible(self.CELL_NUMBER_INPUT)
        await self.expect_visible(self.ID_NUMBER_INPUT)

    async def fill_details(self, data: ForgotPasswordData) -> None:
        """Fill cell number then ID number; `None` fields stay empty."""
        await self.field(self.CELL_NUMBER_INPUT).wait_for()
        if data.cell_number is not None:
            await self.fill(self.CELL_NUMBER_INPUT, data.cell_number)
        if data.id_number is not None:
            await self.fill(self.ID_NUMBER_INPUT, data.id_number)

    @allure.step("Click Next")
    async def submit(self) -> None:
        await self.click(self.NEXT_BUTTON)
        await self.wait_for_load()

    async def submit_details(self, data: ForgotPasswordData) -> None:
        await self.fill_details(data)
        await self.submit()

    @allure.step("Verify error message")
    async def expect_error(self) -> None:
        await self.expect_visible(self.ERROR_MESSAGE, timeout=self.timeouts.assertion_ms)

    @allure.step("Verify reset confirmation")
    async def expect_success(self) -> None:
        await self.expect_visible(self.SUCCESS_MESSAGE, timeout=self.timeouts.success_ms)

    async def expect_on_forgot_password(self) -> None:
        current = self.page.url.lower()
        assert "forgotpassword" in current, (
            f"Expected to remain on the Forgot Password page; actual url={self.page.url}"
        )

    @allure.step("Click 'Back' to login")
    async def back_to_login(self) -> None:
        await self.field(self.BACK_TO_LOGIN_LINK).wait_for()
        await self.click(self.BACK_TO_LOGIN_LINK)
        await self.wait_for_load()

    def is_on_login_page(self) -> bool:
        current = self.page.url.lower()
        return any(marker in current for marker in LOGIN_URL_MARKERS) or current.endswith("/login")
