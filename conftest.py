"""
Repository-level pytest configuration.

Provides:
  - Command line options shared by every suite (--live, --browser, --headed, --device)
  - Logger initialisation from config/config.yaml
  - The session-wide `SuiteSettings` value threaded into browser fixtures and pages

Important:
  No secrets live in this repository. Credentials come from the environment
  (or an uncommitted `.env`); scenarios needing them self-skip otherwise.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from journey_tools.common import init_logger
from testsuites.ui_testing.framework.config_loader import (
    ConfigLoader,
    SuiteSettings,
    browser_projects,
    live_requested,
)


def pytest_addoption(parser):
    group = parser.getgroup("journeys", "Web journey suite options")
    group.addoption(
        "--live",
        action="store_true",
        default=False,
        help="Run browser scenarios against the remote applications (also UI_LIVE=1)",
    )
    group.addoption(
        "--browser",
        action="store",
        default=None,
        choices=("chromium", "firefox", "webkit"),
        help="Browser engine (overrides browser.name)",
    )
    group.addoption(
        "--headed",
        action="store_true",
        default=False,
        help="Show the browser window",
    )
    group.addoption(
        "--device",
        action="store",
        default=None,
        help='Run only this project (Playwright device descriptor), e.g. "Pixel 5"',
    )


def pytest_configure(config):
    loader = ConfigLoader()
    init_logger(
        level=loader.get("logging.level", "INFO"),
        log_file=loader.get("logging.file", "") or None,
    )


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session")
def config_loader() -> ConfigLoader:
    return ConfigLoader()


@pytest.fixture(scope="session")
def settings(request, config_loader: ConfigLoader) -> SuiteSettings:
    """
    Suite configuration: YAML, then environment, then command line.
    """
    live = live_requested(request.config.getoption("--live"))
    suite = SuiteSettings.from_loader(config_loader, live=live)
    device = request.config.getoption("--device")
    return suite.with_browser(
        name=request.config.getoption("--browser"),
        headless=False if request.config.getoption("--headed") else None,
        projects=browser_projects(config_loader, device) if device else None,
    )
