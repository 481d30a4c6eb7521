"""
================================================================================
Browser Manager
================================================================================

Browser lifecycle management for UI automation.

Features:
    - One browser per manager, isolated contexts per scenario
    - Playwright device descriptors ("Desktop Chrome", "Pixel 5")
    - HTTP basic credentials for protected staging hosts
    - Trace / video recording retained only for failed scenarios

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

from loguru import logger
from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Page,
    Playwright,
)

from .config_loader import ArtifactSettings, BrowserSettings


RETAIN_ON_FAILURE = "retain-on-failure"
ALWAYS = "on"
OFF = "off"


def _keep(mode: str, failed: bool) -> bool:
    return mode == ALWAYS or (mode == RETAIN_ON_FAILURE and failed)


class BrowserManager:
    """
    Manages a browser instance and its contexts for UI testing.

    Usage:
        async with BrowserManager(settings.browser, settings.artifacts) as manager:
            context = await manager.new_context()
            page = await context.new_page()
            ...
            await manager.finish_context(context, failed=False, name="test_login")
    """

    DEFAULT_LAUNCH_OPTIONS: Dict[str, Any] = {
        "headless": True,
        "args": [
            "--ignore-certificate-errors",
        ],
    }

    def __init__(
        self,
        browser_settings: Optional[BrowserSettings] = None,
        artifact_settings: Optional[ArtifactSettings] = None,
    ):
        """
        Args:
            browser_settings: Browser name, headless flag, device, viewport, credentials
            artifact_settings: Where and when to keep traces and videos
        """
        self.browser_settings = browser_settings or BrowserSettings()
        self.artifacts = artifact_settings or ArtifactSettings()

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._contexts: List[BrowserContext] = []

    async def __aenter__(self) -> "BrowserManager":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def start(self) -> None:
        """Start Playwright and launch browser."""
        self._playwright = await async_playwright().start()

        name = self.browser_settings.name
        if name == "firefox":
            browser_launcher = self._playwright.firefox
        elif name == "webkit":
            browser_launcher = self._playwright.webkit
        else:
            browser_launcher = self._playwright.chromium

        launch_options = {
            **self.DEFAULT_LAUNCH_OPTIONS,
            "headless": self.browser_settings.headless,
        }

        self._browser = await browser_launcher.launch(**launch_options)
        logger.debug(
            f"Browser started: {name} "
            f"(headless={self.browser_settings.headless}, device={self.browser_settings.device})"
        )

    async def close(self) -> None:
        """Close remaining contexts and the browser."""
        for context in self._contexts:
            await context.close()
        self._contexts.clear()

        if self._browser:
            await self._browser.close()
            self._browser = None

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

        logger.debug("Browser closed")

    def context_options(self, **overrides: Any) -> Dict[str, Any]:
        """
        Build context options: device descriptor first, then suite settings,
        then explicit overrides.
        """
        settings = self.browser_settings
        options: Dict[str, Any] = {}

        if settings.device:
            if not self._playwright:
                raise RuntimeError("Browser not started. Call start() first.")
            descriptor = dict(self._playwright.devices[settings.device])
            # The descriptor's browser is implied by the launched browser
            descriptor.pop("default_browser_type", None)
            if settings.name == "firefox":
                # Firefox rejects is_mobile; viewport and user agent still apply
                descriptor.pop("is_mobile", None)
            options.update(descriptor)
        else:
            options["viewport"] = {
                "width": settings.viewport_width,
                "height": settings.viewport_height,
            }

        options["ignore_https_errors"] = settings.ignore_https_errors
        if settings.http_credentials:
            options["http_credentials"] = settings.http_credentials
        if self.artifacts.video != OFF:
            options["record_video_dir"] = str(self.artifacts.output_dir / "videos")

        options.update(overrides)
        return options

    async def new_context(self, **options: Any) -> BrowserContext:
        """
        Create a new isolated browser context (own cookies and storage).

        Tracing is started when the trace mode is not "off".
        """
        if not self._browser:
            raise RuntimeError("Browser not started. Call start() first.")

        context = await self._browser.new_context(**self.context_options(**options))
        if self.artifacts.trace != OFF:
            await context.tracing.start(screenshots=True, snapshots=True, sources=True)
        self._contexts.append(context)
        return context

    async def new_page(self, context: Optional[BrowserContext] = None, **context_options: Any) -> Page:
        if context is None:
            context = await self.new_context(**context_options)
        return await context.new_page()

    async def finish_context(self, context: BrowserContext, failed: bool, name: str) -> List[Path]:
        """
        Close a context and keep its trace/videos according to the artifact modes.

        Args:
            context: Context created by `new_context`
            failed: Whether the scenario using it failed
            name: Filesystem-safe scenario name used for the artifact folder

        Returns:
            Paths of retained artifacts
        """
        retained: List[Path] = []
        target_dir = self.artifacts.output_dir / name

        if self.artifacts.trace != OFF:
            if _keep(self.artifacts.trace, failed):
                target_dir.mkdir(parents=True, exist_ok=True)
                trace_path = target_dir / "trace.zip"
                await context.tracing.stop(path=str(trace_path))
                retained.append(trace_path)
            else:
                await context.tracing.stop()

        videos = [page.video for page in context.pages if page.video]
        await context.close()
        if context in self._contexts:
            self._contexts.remove(context)

        for index, video in enumerate(videos):
            if _keep(self.artifacts.video, failed):
                target_dir.mkdir(parents=True, exist_ok=True)
                video_path = target_dir / f"video-{index}.webm"
                await video.save_as(str(video_path))
                retained.append(video_path)
            await video.delete()

        for path in retained:
            logger.info(f"Retained artifact: {path}")
        return retained

    @property
    def browser(self) -> Optional[Browser]:
        return self._browser


__all__ = [
    "BrowserManager",
]
