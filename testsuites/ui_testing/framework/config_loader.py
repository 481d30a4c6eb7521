"""
================================================================================
Configuration Loader
================================================================================

YAML-based configuration management with environment variable override support.

Features:
    - YAML configuration loading (config/config.yaml)
    - Optional `.env` file loading (never overrides real environment)
    - Environment variable override (LOGIN_USERNAME overrides login.username)
    - Dot notation path access
    - Typed, immutable `SuiteSettings` threaded into pages and browser manager

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml
from dotenv import load_dotenv
from loguru import logger


# Default configuration file paths
PROJECT_ROOT = Path(__file__).parent.parent.parent.parent
DEFAULT_CONFIG_PATH = PROJECT_ROOT / "config" / "config.yaml"
DEFAULT_DOTENV_PATH = PROJECT_ROOT / ".env"

# Credentials still holding one of these prefixes were never configured
PLACEHOLDER_PREFIX = "PLACEHOLDER"

# Every scenario runs once per project (a Playwright device descriptor)
DEFAULT_PROJECTS = ("Desktop Chrome", "Pixel 5")

# Basic auth of the staging host when neither http.* nor real login
# credentials are configured
STAGING_HTTP_USERNAME = "admin"
STAGING_HTTP_PASSWORD = "finchoice"

LIVE_ENV_VAR = "UI_LIVE"
TRUTHY = ("1", "true", "yes", "on")


def live_requested(cli_flag: bool = False) -> bool:
    """Live scenarios run when `--live` is passed or UI_LIVE is truthy."""
    return bool(cli_flag) or os.environ.get(LIVE_ENV_VAR, "").strip().lower() in TRUTHY


class ConfigurationError(Exception):
    """Raised when configuration loading or access fails."""
    pass


def browser_projects(loader: "ConfigLoader", device: Optional[str] = None) -> Tuple[str, ...]:
    """
    Projects every browser scenario runs under.

    An explicit `device` (the --device option) replaces the configured list.
    BROWSER_PROJECTS may hold a comma separated list.

    Raises:
        ConfigurationError: When the configured list is empty
    """
    if device:
        return (device,)
    value = loader.get("browser.projects", list(DEFAULT_PROJECTS))
    if isinstance(value, str):
        value = value.split(",")
    projects = tuple(str(name).strip() for name in value if str(name).strip())
    if not projects:
        raise ConfigurationError("browser.projects is empty; list at least one device descriptor")
    return projects


class ConfigLoader:
    """
    Configuration loader with YAML and environment variable support.

    Configuration hierarchy (highest to lowest priority):
        1. Environment variables (LOGIN_USERNAME), including values from `.env`
        2. YAML configuration file
        3. Default values

    Usage:
        >>> config = ConfigLoader()
        >>> config.get("finchoice.base_url")
        'https://staging.finchoice.mobi/uat1'

        >>> config.get("timeouts.action_ms", 10000)
        10000

    Environment Variable Mapping:
        - login.username -> LOGIN_USERNAME
        - fp.valid_cell -> FP_VALID_CELL
        - browser.headless -> BROWSER_HEADLESS
    """

    def __init__(
        self,
        config_path: Optional[Path] = None,
        dotenv_path: Optional[Path] = None,
    ) -> None:
        """
        Initialize configuration loader.

        Args:
            config_path: Path to YAML configuration file.
                        Uses DEFAULT_CONFIG_PATH if not specified.
            dotenv_path: Path to an optional `.env` file.
        """
        self._config_path = Path(config_path or DEFAULT_CONFIG_PATH)
        self._dotenv_path = Path(dotenv_path or DEFAULT_DOTENV_PATH)
        self._config: Dict[str, Any] = {}
        self._load_dotenv()
        self._load_config()

    def _load_dotenv(self) -> None:
        if self._dotenv_path.exists():
            load_dotenv(self._dotenv_path, override=False)
            logger.debug(f"Loaded environment from: {self._dotenv_path}")

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        if not self._config_path.exists():
            logger.warning(
                f"Configuration file not found: {self._config_path}. "
                f"Using defaults and environment variables only."
            )
            self._config = {}
            return

        try:
            with open(self._config_path, "r", encoding="utf-8") as f:
                self._config = yaml.safe_load(f) or {}
            logger.debug(f"Loaded configuration from: {self._config_path}")
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in configuration file: {e}"
            ) from e

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-notation path.

        First checks environment variables, then YAML config, then default.

        Args:
            key: Dot-notation path (e.g., "shopify.base_url")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        env_key = key.upper().replace(".", "_")
        env_value = os.environ.get(env_key)
        if env_value is not None:
            return self._convert_type(env_value, default)

        value: Any = self._config
        for part in key.split("."):
            if isinstance(value, dict):
                value = value.get(part)
            else:
                value = None

            if value is None:
                return default

        return value

    def get_section(self, section: str) -> Dict[str, Any]:
        """
        Get entire configuration section.

        Args:
            section: Section name (e.g., "finchoice", "browser")

        Returns:
            Section dictionary or empty dict if not found
        """
        return self._config.get(section, {}) or {}

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()
        logger.info(f"Configuration reloaded from: {self._config_path}")

    def _convert_type(self, value: str, reference: Any) -> Any:
        """
        Convert string value to match reference type.

        Used for environment variables which are always strings.
        """
        if reference is None:
            return value

        if isinstance(reference, bool):
            return value.lower() in ("true", "1", "yes", "on")
        if isinstance(reference, int):
            try:
                return int(value)
            except ValueError:
                return value
        if isinstance(reference, float):
            try:
                return float(value)
            except ValueError:
                return value

        return value


# =============================================================================
# Typed Settings
# =============================================================================

@dataclass(frozen=True)
class AppSettings:
    """Base URL and well-known paths of one target application."""
    name: str
    base_url: str
    paths: Dict[str, str] = field(default_factory=dict)

    def url_for(self, path_key_or_path: str) -> str:
        """Join a named path (or a literal path) onto the base URL."""
        path = self.paths.get(path_key_or_path, path_key_or_path)
        if path.startswith("http://") or path.startswith("https://"):
            return path
        if not path.startswith("/"):
            path = f"/{path}"
        return f"{self.base_url.rstrip('/')}{path}"


@dataclass(frozen=True)
class BrowserSettings:
    name: str = "chromium"
    headless: bool = True
    # Active project; None means a plain desktop viewport
    device: Optional[str] = None
    projects: Tuple[str, ...] = DEFAULT_PROJECTS
    viewport_width: int = 1920
    viewport_height: int = 1080
    ignore_https_errors: bool = True
    http_username: Optional[str] = None
    http_password: Optional[str] = None

    @property
    def http_credentials(self) -> Optional[Dict[str, str]]:
        if self.http_username and self.http_password:
            return {"username": self.http_username, "password": self.http_password}
        return None


@dataclass(frozen=True)
class Timeouts:
    """Bounded waits, in milliseconds."""
    action_ms: int = 10000
    assertion_ms: int = 10000
    success_ms: int = 15000
    navigation_ms: int = 15000


@dataclass(frozen=True)
class ArtifactSettings:
    evidence_dir: Path = Path("test-results/screenshots")
    output_dir: Path = Path("test-results")
    trace: str = "retain-on-failure"
    video: str = "retain-on-failure"
    screenshot: str = "only-on-failure"


@dataclass(frozen=True)
class CredentialSettings:
    login_username: str = "PLACEHOLDER_USERNAME"
    login_password: str = "PLACEHOLDER_PASSWORD"
    fp_valid_cell: str = "PLACEHOLDER_CELL"
    fp_valid_id: str = "PLACEHOLDER_ID"

    @staticmethod
    def is_placeholder(value: Optional[str]) -> bool:
        return not value or value.startswith(PLACEHOLDER_PREFIX)

    @property
    def has_login(self) -> bool:
        return not (
            self.is_placeholder(self.login_username)
            or self.is_placeholder(self.login_password)
        )

    @property
    def has_forgot_password_account(self) -> bool:
        return not (
            self.is_placeholder(self.fp_valid_cell)
            or self.is_placeholder(self.fp_valid_id)
        )


@dataclass(frozen=True)
class SuiteSettings:
    """
    Immutable configuration value for one test run.

    Built once from a ConfigLoader and passed explicitly into every page
    object, the browser manager and the evidence recorder.
    """
    apps: Dict[str, AppSettings]
    browser: BrowserSettings = field(default_factory=BrowserSettings)
    timeouts: Timeouts = field(default_factory=Timeouts)
    artifacts: ArtifactSettings = field(default_factory=ArtifactSettings)
    credentials: CredentialSettings = field(default_factory=CredentialSettings)
    live: bool = False

    def app(self, name: str) -> AppSettings:
        try:
            return self.apps[name]
        except KeyError as e:
            raise ConfigurationError(
                f"No application configured under '{name}'. "
                f"Known: {sorted(self.apps)}"
            ) from e

    def with_browser(self, **changes: Any) -> "SuiteSettings":
        """Return a copy with browser settings overridden (CLI options)."""
        changes = {k: v for k, v in changes.items() if v is not None}
        return replace(self, browser=replace(self.browser, **changes))

    def for_project(self, project: str) -> "SuiteSettings":
        """Settings of one project run: its device descriptor becomes active."""
        return replace(self, browser=replace(self.browser, device=project or None))

    @classmethod
    def from_loader(cls, loader: ConfigLoader, live: bool = False) -> "SuiteSettings":
        """
        Build settings from YAML + environment.

        Raises:
            ConfigurationError: When an application has no base_url or
                browser.projects is empty
        """
        apps: Dict[str, AppSettings] = {}
        for name in ("finchoice", "shopify"):
            base_url = loader.get(f"{name}.base_url")
            if not base_url:
                raise ConfigurationError(f"Missing '{name}.base_url' in configuration")
            paths = loader.get_section(name).get("paths", {}) or {}
            apps[name] = AppSettings(
                name=name,
                base_url=str(base_url).rstrip("/"),
                paths={k: str(v) for k, v in paths.items()},
            )

        credentials = CredentialSettings(
            login_username=loader.get("login.username", "PLACEHOLDER_USERNAME"),
            login_password=loader.get("login.password", "PLACEHOLDER_PASSWORD"),
            fp_valid_cell=loader.get("fp.valid_cell", "PLACEHOLDER_CELL"),
            fp_valid_id=loader.get("fp.valid_id", "PLACEHOLDER_ID"),
        )

        # Staging basic auth: http.*, else the login credentials, else the staging defaults
        http_username = loader.get("http.username", "")
        http_password = loader.get("http.password", "")
        if not (http_username and http_password):
            if credentials.has_login:
                http_username, http_password = credentials.login_username, credentials.login_password
            else:
                http_username, http_password = STAGING_HTTP_USERNAME, STAGING_HTTP_PASSWORD

        browser = BrowserSettings(
            name=loader.get("browser.name", "chromium"),
            headless=loader.get("browser.headless", True),
            projects=browser_projects(loader),
            viewport_width=loader.get("browser.viewport_width", 1920),
            viewport_height=loader.get("browser.viewport_height", 1080),
            ignore_https_errors=loader.get("browser.ignore_https_errors", True),
            http_username=http_username,
            http_password=http_password,
        )

        timeouts = Timeouts(
            action_ms=loader.get("timeouts.action_ms", 10000),
            assertion_ms=loader.get("timeouts.assertion_ms", 10000),
            success_ms=loader.get("timeouts.success_ms", 15000),
            navigation_ms=loader.get("timeouts.navigation_ms", 15000),
        )

        artifacts = ArtifactSettings(
            evidence_dir=Path(loader.get("artifacts.evidence_dir", "test-results/screenshots")),
            output_dir=Path(loader.get("artifacts.output_dir", "test-results")),
            trace=loader.get("artifacts.trace", "retain-on-failure"),
            video=loader.get("artifacts.video", "retain-on-failure"),
            screenshot=loader.get("artifacts.screenshot", "only-on-failure"),
        )

        return cls(
            apps=apps,
            browser=browser,
            timeouts=timeouts,
            artifacts=artifacts,
            credentials=credentials,
            live=live,
        )


__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "live_requested",
    "browser_projects",
    "AppSettings",
    "BrowserSettings",
    "Timeouts",
    "ArtifactSettings",
    "CredentialSettings",
    "SuiteSettings",
]
