"""
================================================================================
Root Pytest Configuration
================================================================================

Registers the project-wide markers and tags tests by location:
    - testsuites/ui_testing/**  -> ui, live (skipped unless --live / UI_LIVE=1)
    - testsuites/unit/**        -> unit

================================================================================
"""

import pytest

from testsuites.ui_testing.framework.config_loader import live_requested


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )
    config.addinivalue_line(
        "markers", "P3: Low priority tests - extensive validation"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests simulating user flows"
    )

    # Domain markers
    config.addinivalue_line(
        "markers", "ui: Browser scenarios"
    )
    config.addinivalue_line(
        "markers", "live: Requires the remote applications (enable with --live or UI_LIVE=1)"
    )
    config.addinivalue_line(
        "markers", "unit: Offline tests of the framework, no browser"
    )

    # Feature markers
    config.addinivalue_line(
        "markers", "auth: Tests related to login and logout"
    )
    config.addinivalue_line(
        "markers", "apply_now: Tests related to the loan application"
    )
    config.addinivalue_line(
        "markers", "forgot_password: Tests related to password recovery"
    )
    config.addinivalue_line(
        "markers", "register: Tests related to account registration"
    )


def pytest_collection_modifyitems(config, items):
    """
    Tag tests by directory and skip live scenarios unless enabled.
    """
    run_live = live_requested(config.getoption("--live"))
    skip_live = pytest.mark.skip(reason="live scenario: pass --live or set UI_LIVE=1")

    for item in items:
        path = str(item.fspath)

        if "ui_testing" in path:
            item.add_marker(pytest.mark.ui)
            item.add_marker(pytest.mark.live)
            if not run_live:
                item.add_marker(skip_live)

        if "unit" in path.replace("\\", "/").split("/"):
            item.add_marker(pytest.mark.unit)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    if live_requested(config.getoption("--live")):
        mode = "LIVE (remote applications)"
    else:
        mode = "offline (live scenarios skipped)"
    return [
        "",
        "=" * 60,
        "Web Journey Automation Suite",
        f"Mode: {mode}",
        "=" * 60,
        "",
    ]
