"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based page-interaction layer for browser journey tests.

Components:
    - smart_locator: Intent-based element resolution with ordered strategies
    - element_actions: Two-variant dropdown selection with typed outcomes
    - page_base: Base page object for common operations
    - evidence: Scenario/step screenshot capture
    - browser_manager: Browser lifecycle and failure artifacts
    - config_loader: YAML + environment configuration, typed settings
    - data_factory: Immutable scenario data

Author: Automation Team
License: MIT
================================================================================
"""

from .smart_locator import SmartLocator, ElementNotFoundError, FieldReference
from .element_actions import DropdownSelectionError, SelectOutcome
from .page_base import BasePage
from .evidence import EvidenceRecorder, EvidenceError
from .browser_manager import BrowserManager
from .config_loader import ConfigLoader, ConfigurationError, SuiteSettings

__all__ = [
    "SmartLocator",
    "ElementNotFoundError",
    "FieldReference",
    "DropdownSelectionError",
    "SelectOutcome",
    "BasePage",
    "EvidenceRecorder",
    "EvidenceError",
    "BrowserManager",
    "ConfigLoader",
    "ConfigurationError",
    "SuiteSettings",
]
