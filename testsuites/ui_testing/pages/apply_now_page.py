"""
================================================================================
Apply Now Page Object (Async / Playwright)
================================================================================

Multi-step FinChoice loan application:
    1. "Apply Now" entry point on the authenticated landing page
    2. Contact details (mobile, email)
    3. Employment & income (status, employer, gross/net income, salary day)
    4. Review / submit

Field markup on the live site varies between releases, so every field is an
ordered list of attribute/role/text strategies rather than a single selector.

================================================================================
"""

from __future__ import annotations

from typing import List

import allure
from loguru import logger

from testsuites.ui_testing.framework.data_factory import ContactDetails, EmploymentDetails
from testsuites.ui_testing.framework.page_base import PageBase
from testsuites.ui_testing.framework.smart_locator import (
    AttributeContains,
    Css,
    FieldReference,
    InputType,
    Text,
)


FORM_CONTROLS = 'input:not([type="hidden"]), select, textarea'


class ApplyNowPage(PageBase):
    """Apply Now page object (async)."""

    APP = "finchoice"
    URL_PATH = "home"

    # ============================================================
    # Entry point
    # ============================================================

    APPLY_NOW_BUTTON = FieldReference.of(
        "apply now button",
        Text("Apply Now", tag="a"),
        Text("Apply Now", tag="button"),
        Text("Apply", tag="a"),
        Text("Apply", tag="button"),
    )

    # ============================================================
    # Contact details
    # ============================================================

    MOBILE_NUMBER_INPUT = FieldReference.of(
        "mobile number input",
        AttributeContains("name", "mobile"),
        AttributeContains("name", "phone"),
        AttributeContains("name", "cell"),
        AttributeContains("id", "mobile"),
        AttributeContains("placeholder", "mobile"),
        AttributeContains("placeholder", "cell"),
    )
    EMAIL_INPUT = FieldReference.of(
        "email input",
        InputType("email"),
        AttributeContains("name", "email"),
        AttributeContains("id", "email"),
    )

    # ============================================================
    # Employment & income
    # ============================================================

    EMPLOYMENT_STATUS_SELECT = FieldReference.of(
        "employment status dropdown",
        AttributeContains("name", "employment", tag="select"),
        AttributeContains("id", "employment", tag="select"),
        AttributeContains("aria-label", "employment", tag='[role="combobox"]'),
    )
    EMPLOYER_NAME_INPUT = FieldReference.of(
        "employer name input",
        AttributeContains("name", "employer"),
        AttributeContains("id", "employer"),
        AttributeContains("placeholder", "employer"),
    )
    GROSS_INCOME_INPUT = FieldReference.of(
        "gross income input",
        AttributeContains("name", "gross"),
        AttributeContains("id", "gross"),
        AttributeContains("placeholder", "gross"),
    )
    NET_INCOME_INPUT = FieldReference.of(
        "net income input",
        AttributeContains("name", "net"),
        AttributeContains("name", "nett"),
        AttributeContains("id", "net"),
        AttributeContains("placeholder", "net"),
    )
    EMPLOYMENT_START_DATE_INPUT = FieldReference.of(
        "employment start date input",
        Css('input[name*="start" i][type="date"]'),
        AttributeContains("id", "start"),
        AttributeContains("placeholder", "start date"),
    )
    SALARY_DAY_INPUT = FieldReference.of(
        "salary day input",
        AttributeContains("name", "salary"),
        AttributeContains("name", "salary", tag="select"),
        AttributeContains("id", "salaryDay"),
    )

    # ============================================================
    # Form navigation
    # ============================================================

    NEXT_BUTTON = FieldReference.of(
        "next button",
        Text("Next", tag="button"),
        Text("Continue", tag="button"),
        Css('input[value="Next"]'),
    )
    BACK_BUTTON = FieldReference.of(
        "back button",
        Text("Back", tag="button"),
        Text("Previous", tag="button"),
    )
    SUBMIT_BUTTON = FieldReference.of(
        "submit application button",
        Css('button[type="submit"]:has-text("Submit")'),
        Text("Submit Application", tag="button"),
        Text("Apply", tag="button"),
    )

    # ============================================================
    # Feedback
    # ============================================================

    SUCCESS_MESSAGE = FieldReference.of(
        "application success message",
        Css('[class*="success"]'),
        Css('[role="alert"]:has-text("success")'),
        Text("Thank", tag="h1"),
        Text("Thank", tag="h2"),
    )
    ERROR_MESSAGES = FieldReference.of(
        "application error messages",
        Css('[class*="error"]'),
        Css('[class*="alert-danger"]'),
        Css('[role="alert"]'),
    )
    VALIDATION_ERRORS = FieldReference.of(
        "field validation errors",
        Css('[class*="invalid"]'),
        Css('[class*="field-error"]'),
        Css(".error-message"),
        Css('span[class*="error"]'),
    )

    APPLICATION_URL = r"apply|application|loan"

    # ============================================================
    # Actions
    # ============================================================

    @allure.step("Click Apply Now")
    async def click_apply_now(self) -> None:
        await self.field(self.APPLY_NOW_BUTTON).wait_for()
        await self.click(self.APPLY_NOW_BUTTON)

    @allure.step("Verify application form is open")
    async def expect_application_form(self) -> None:
        await self.expect_url_matches(self.APPLICATION_URL)

    @allure.step("Fill contact details")
    async def fill_contact_details(self, contact: ContactDetails) -> None:
        """Mobile first, then email."""
        await self.field(self.MOBILE_NUMBER_INPUT).wait_for()
        await self.fill(self.MOBILE_NUMBER_INPUT, contact.mobile)
        await self.fill(self.EMAIL_INPUT, contact.email)

    @allure.step("Verify contact step is shown")
    async def expect_contact_step(self) -> None:
        await self.expect_visible(self.MOBILE_NUMBER_INPUT)
        await self.expect_visible(self.EMAIL_INPUT)

    @allure.step("Wait for employment step")
    async def wait_for_employment_step(self) -> None:
        await self.field(self.EMPLOYMENT_STATUS_SELECT).wait_for(timeout=self.timeouts.assertion_ms)

    @allure.step("Verify employment step is shown")
    async def expect_employment_step(self) -> None:
        await self.expect_visible(self.EMPLOYMENT_STATUS_SELECT)
        await self.expect_visible(self.GROSS_INCOME_INPUT)
        await self.expect_visible(self.NET_INCOME_INPUT)

    @allure.step("Fill employment details")
    async def fill_employment_details(self, employment: EmploymentDetails) -> None:
        """Status, employer, gross, net, salary day; `None` values are skipped."""
        if employment.status:
            result = await self.select(self.EMPLOYMENT_STATUS_SELECT, employment.status)
            logger.debug(f"Employment status selected via {result.outcome.value} dropdown")
        if employment.employer:
            await self.fill(self.EMPLOYER_NAME_INPUT, employment.employer)
        if employment.gross_income:
            await self.fill(self.GROSS_INCOME_INPUT, employment.gross_income)
        if employment.net_income:
            await self.fill(self.NET_INCOME_INPUT, employment.net_income)
        if employment.salary_day:
            await self.fill(self.SALARY_DAY_INPUT, employment.salary_day)

    async def fill_gross_income(self, raw_value: str) -> None:
        await self.fill(self.GROSS_INCOME_INPUT, raw_value)

    async def click_next(self) -> None:
        await self.click(self.NEXT_BUTTON)

    async def click_back(self) -> None:
        await self.click(self.BACK_BUTTON)

    async def click_submit(self) -> None:
        await self.field(self.SUBMIT_BUTTON).wait_for(timeout=self.timeouts.assertion_ms)
        await self.click(self.SUBMIT_BUTTON)

    # ============================================================
    # Assertions
    # ============================================================

    @allure.step("Verify application success")
    async def expect_success(self) -> None:
        await self.expect_visible(self.SUCCESS_MESSAGE, timeout=self.timeouts.success_ms)

    @allure.step("Verify validation errors are shown")
    async def expect_validation_errors(self) -> None:
        await self.expect_visible(
            self.VALIDATION_ERRORS,
            message="Submitting invalid data should show at least one validation error",
        )

    @allure.step("Verify no validation errors")
    async def expect_no_validation_errors(self) -> None:
        await self.expect_no_matches(self.VALIDATION_ERRORS)

    async def inputs_without_accessible_label(self) -> List[str]:
        """
        Describe every form control (hidden inputs excluded, visible or not)
        lacking a <label for>, aria-label or aria-labelledby.
        """
        controls = self.page.locator(FORM_CONTROLS)
        missing: List[str] = []
        for index in range(await controls.count()):
            control = controls.nth(index)
            control_id = await control.get_attribute("id")
            aria_label = await control.get_attribute("aria-label")
            labelled_by = await control.get_attribute("aria-labelledby")

            has_label = False
            if control_id:
                has_label = await self.page.locator(f'label[for="{control_id}"]').count() > 0

            if not (has_label or aria_label or labelled_by):
                missing.append(f'#{index} (id="{control_id}")')
        return missing
