"""
================================================================================
UI Testing Pytest Configuration
================================================================================

Fixtures for browser management, page objects and journey preconditions.

Key Features:
- One browser and one isolated context per scenario
- Trace / video / failure screenshot kept only for failed scenarios
- Page Object fixtures built from the session `SuiteSettings`
- Authenticated preconditions that self-skip without real credentials

================================================================================
"""

from typing import AsyncGenerator

import pytest
from loguru import logger
from playwright.async_api import BrowserContext, Page

from journey_tools.report_tools.allure_utils import attach_png
from testsuites.ui_testing.framework.browser_manager import OFF, BrowserManager
from testsuites.ui_testing.framework.config_loader import ConfigLoader, SuiteSettings, browser_projects
from testsuites.ui_testing.framework.data_factory import (
    VALID_CONTACT,
    Credentials,
    ScenarioDataFactory,
)
from testsuites.ui_testing.framework.evidence import EvidenceRecorder, safe_name
from testsuites.ui_testing.pages import ApplyNowPage, ForgotPasswordPage, LoginPage, RegisterPage


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Store each phase report on the item (rep_setup / rep_call / rep_teardown)
    so fixtures can decide what to keep at teardown.
    """
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)


def _failed(request) -> bool:
    for when in ("setup", "call"):
        report = getattr(request.node, f"rep_{when}", None)
        if report is not None and report.failed:
            return True
    return False


def pytest_generate_tests(metafunc):
    """Run every browser scenario once per configured project."""
    if "project" in metafunc.fixturenames:
        projects = browser_projects(ConfigLoader(), metafunc.config.getoption("--device"))
        metafunc.parametrize("project", projects, ids=list(projects), indirect=True)


# ================================================================================
# Browser Fixtures
# ================================================================================

@pytest.fixture
def project(request) -> str:
    """Playwright device descriptor of the current run (e.g. "Pixel 5")."""
    return request.param


@pytest.fixture
def project_settings(settings: SuiteSettings, project: str) -> SuiteSettings:
    return settings.for_project(project)


@pytest.fixture
async def browser_manager(project_settings: SuiteSettings) -> AsyncGenerator[BrowserManager, None]:
    """
    Function-scoped browser manager for one project.

    Each scenario gets its own browser, so no state leaks between journeys.
    """
    async with BrowserManager(project_settings.browser, project_settings.artifacts) as manager:
        yield manager


@pytest.fixture
async def context(
    request,
    settings: SuiteSettings,
    browser_manager: BrowserManager,
) -> AsyncGenerator[BrowserContext, None]:
    """
    Isolated browser context (own cookies and storage).

    On failure a full-page screenshot of every open page is attached to the
    report, then trace and video are retained per the artifact modes.
    """
    context = await browser_manager.new_context()
    yield context

    failed = _failed(request)
    name = safe_name(request.node.name)

    if failed and settings.artifacts.screenshot != OFF:
        target_dir = settings.artifacts.output_dir / name
        target_dir.mkdir(parents=True, exist_ok=True)
        for index, open_page in enumerate(context.pages):
            path = target_dir / f"failure-{index}.png"
            await open_page.screenshot(path=str(path), full_page=True)
            attach_png(path, name="failure_screenshot")
            logger.info(f"Failure screenshot: {path}")

    await browser_manager.finish_context(context, failed=failed, name=name)


@pytest.fixture
async def page(context: BrowserContext) -> Page:
    """New page inside the scenario's context (closed with the context)."""
    return await context.new_page()


@pytest.fixture
def evidence(page: Page, settings: SuiteSettings) -> EvidenceRecorder:
    return EvidenceRecorder(page, settings.artifacts.evidence_dir)


@pytest.fixture
def data_factory() -> ScenarioDataFactory:
    return ScenarioDataFactory()


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
def login_page(page: Page, settings: SuiteSettings, evidence: EvidenceRecorder) -> LoginPage:
    return LoginPage(page, settings, evidence)


@pytest.fixture
def forgot_password_page(
    page: Page, settings: SuiteSettings, evidence: EvidenceRecorder
) -> ForgotPasswordPage:
    return ForgotPasswordPage(page, settings, evidence)


@pytest.fixture
def apply_now_page(page: Page, settings: SuiteSettings, evidence: EvidenceRecorder) -> ApplyNowPage:
    return ApplyNowPage(page, settings, evidence)


@pytest.fixture
async def register_page(
    page: Page, settings: SuiteSettings, evidence: EvidenceRecorder
) -> RegisterPage:
    """RegisterPage already opened on /account/register with the form visible."""
    register = RegisterPage(page, settings, evidence)
    await register.open()
    await register.expect_form_visible()
    return register


# ================================================================================
# Authentication Fixtures
# ================================================================================

@pytest.fixture
def valid_credentials(settings: SuiteSettings) -> Credentials:
    """
    Real FinChoice credentials from LOGIN_USERNAME / LOGIN_PASSWORD.

    Skips the scenario while either still holds a PLACEHOLDER_* value.
    """
    creds = settings.credentials
    if not creds.has_login:
        pytest.skip("LOGIN_USERNAME / LOGIN_PASSWORD not configured")
    return Credentials(username=creds.login_username, password=creds.login_password)


@pytest.fixture
async def authenticated_page(login_page: LoginPage, valid_credentials: Credentials) -> LoginPage:
    """LoginPage after a successful login (URL no longer a login URL)."""
    await login_page.login_as(valid_credentials)
    return login_page


@pytest.fixture
async def application_form(authenticated_page: LoginPage, apply_now_page: ApplyNowPage) -> ApplyNowPage:
    """Logged in, Apply Now clicked, application form open."""
    await apply_now_page.click_apply_now()
    await apply_now_page.wait_for_load()
    return apply_now_page


@pytest.fixture
async def employment_step(application_form: ApplyNowPage) -> ApplyNowPage:
    """Valid contact details submitted; employment step rendered."""
    await application_form.fill_contact_details(VALID_CONTACT)
    await application_form.click_next()
    await application_form.wait_for_employment_step()
    return application_form
