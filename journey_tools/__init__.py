"""
================================================================================
Journey Tools
================================================================================

Support utilities shared by the journey suites and the test runner.

Modules:
    - common: Loguru logging setup and small filesystem helpers
    - report_tools: Allure attachment helpers and results summary

Example:
    from journey_tools.common import init_logger
    from journey_tools.report_tools.allure_utils import attach_observation

    init_logger(level="DEBUG")
    attach_observation("TC002", {"error_visible": False})

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "common",
    "report_tools",
]
