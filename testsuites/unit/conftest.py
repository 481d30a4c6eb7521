"""
================================================================================
Unit Test Fakes
================================================================================

A minimal in-memory stand-in for the Playwright page/locator surface used by
the framework, so resolution, dropdown and page-object logic can be tested
without a browser.

    dom.add('input[type="email"]', name="email")       # one matching element
    locator = fake_page.locator('input[type="email"]')
    await locator.first.fill("a@b.co")
    assert dom.actions == [("fill", "email", "a@b.co")]

================================================================================
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from testsuites.ui_testing.framework.config_loader import AppSettings, ArtifactSettings, SuiteSettings


@dataclass
class FakeElement:
    name: str
    visible: bool = True
    text: str = ""
    attributes: Dict[str, str] = field(default_factory=dict)
    # Option labels for a native <select>; None for anything else
    options: Optional[List[str]] = None
    # Selector of the container this element sits in (e.g. a form)
    within: Optional[str] = None


class FakeDom:
    """
    Selector -> elements registry plus an ordered log of interactions.

    Elements are in document order: the order they were added.
    """

    def __init__(self):
        self.nodes: List[Tuple[str, FakeElement]] = []
        self.actions: List[Tuple[Any, ...]] = []
        self.wait_timeouts: List[Optional[int]] = []
        self.action_timeouts: List[Optional[int]] = []

    def add(self, selector: str, name: Optional[str] = None, **kwargs: Any) -> FakeElement:
        element = FakeElement(name=name or selector, **kwargs)
        self.nodes.append((selector, element))
        return element

    def remove(self, selector: str) -> None:
        self.nodes = [(s, e) for s, e in self.nodes if s != selector]

    def match(self, selectors: Tuple[str, ...], within: Optional[Tuple[str, ...]] = None) -> List[FakeElement]:
        found: List[FakeElement] = []
        for selector, element in self.nodes:
            if selector not in selectors or element in found:
                continue
            if within is not None and element.within not in within:
                continue
            found.append(element)
        return found

    def in_document_order(self, elements: List[FakeElement]) -> List[FakeElement]:
        order = [e for _, e in self.nodes]
        unique: List[FakeElement] = []
        for element in elements:
            if element not in unique:
                unique.append(element)
        return sorted(unique, key=order.index)


class FakeLocator:
    """
    Mirrors the Playwright Locator semantics the framework depends on:
    `or_` unions in document order, `.first`/`.nth` narrow before waiting,
    `filter(visible=True)` drops hidden elements, and actions wait for a
    visible element.
    """

    def __init__(
        self,
        dom: FakeDom,
        selectors: Tuple[str, ...] = (),
        within: Optional[Tuple[str, ...]] = None,
        parts: Optional[List["FakeLocator"]] = None,
        index: Optional[int] = None,
        has_text: Optional[str] = None,
        visible: Optional[bool] = None,
    ):
        self.dom = dom
        self.selectors = selectors
        self.within = within
        self.parts = parts
        self.index = index
        self.has_text = has_text
        self.visible = visible

    def _copy(self, **changes: Any) -> "FakeLocator":
        attrs = dict(
            selectors=self.selectors,
            within=self.within,
            parts=self.parts,
            index=self.index,
            has_text=self.has_text,
            visible=self.visible,
        )
        attrs.update(changes)
        return FakeLocator(self.dom, **attrs)

    def _all(self) -> List[FakeElement]:
        if self.parts is not None:
            elements = self.dom.in_document_order([e for part in self.parts for e in part._all()])
        else:
            elements = self.dom.match(self.selectors, self.within)
        if self.has_text is not None:
            elements = [e for e in elements if self.has_text in e.text]
        if self.visible is not None:
            elements = [e for e in elements if e.visible == self.visible]
        return elements

    def _target(self) -> Optional[FakeElement]:
        elements = self._all()
        position = self.index or 0
        return elements[position] if position < len(elements) else None

    def _one(self) -> FakeElement:
        element = self._target()
        if element is None:
            raise PlaywrightTimeoutError(f"Timeout: no element for {self.selectors}")
        return element

    def _actionable(self, timeout: Optional[int]) -> FakeElement:
        self.dom.action_timeouts.append(timeout)
        element = self._target()
        if element is None or not element.visible:
            raise PlaywrightTimeoutError(
                f"Timeout {timeout}ms exceeded waiting for {self.selectors} to be visible"
            )
        return element

    # Composition
    def or_(self, other: "FakeLocator") -> "FakeLocator":
        return FakeLocator(self.dom, parts=[self, other])

    @property
    def first(self) -> "FakeLocator":
        return self._copy(index=0)

    def nth(self, index: int) -> "FakeLocator":
        return self._copy(index=index)

    def filter(self, has_text: Optional[str] = None, visible: Optional[bool] = None) -> "FakeLocator":
        changes: Dict[str, Any] = {}
        if has_text is not None:
            changes["has_text"] = has_text
        if visible is not None:
            changes["visible"] = visible
        return self._copy(**changes)

    def locator(self, selector: str) -> "FakeLocator":
        return FakeLocator(self.dom, (selector,), within=self.selectors)

    def get_by_role(self, role: str, name: Optional[str] = None, exact: bool = False) -> "FakeLocator":
        return self.locator(f"role={role}[name={name}]")

    def get_by_text(self, text: Any) -> "FakeLocator":
        return self.locator(f"text={text}")

    # Queries
    async def count(self) -> int:
        if self.index is not None:
            return 0 if self._target() is None else 1
        return len(self._all())

    async def wait_for(self, state: str = "visible", timeout: Optional[int] = None) -> None:
        self.dom.wait_timeouts.append(timeout)
        element = self._target()
        satisfied = {
            "attached": element is not None,
            "detached": element is None,
            "visible": element is not None and element.visible,
            "hidden": element is None or not element.visible,
        }[state]
        if not satisfied:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for {self.selectors}")

    async def is_visible(self) -> bool:
        element = self._target()
        return element is not None and element.visible

    async def text_content(self) -> str:
        return self._one().text

    async def get_attribute(self, name: str) -> Optional[str]:
        return self._one().attributes.get(name)

    # Actions
    async def click(self, timeout: Optional[int] = None, **kwargs: Any) -> None:
        self.dom.actions.append(("click", self._actionable(timeout).name))

    async def fill(self, value: str, timeout: Optional[int] = None, **kwargs: Any) -> None:
        self.dom.actions.append(("fill", self._actionable(timeout).name, value))

    async def select_option(self, label: str, timeout: Optional[int] = None) -> List[str]:
        element = self._actionable(timeout)
        if element.options is None:
            raise PlaywrightError("Error: Element is not a <select> element")
        if label not in element.options:
            raise PlaywrightError(f"Error: did not find some options: {label}")
        self.dom.actions.append(("select", element.name, label))
        return [label]


class FakePage:
    def __init__(self, dom: FakeDom, url: str = "about:blank"):
        self.dom = dom
        self.url = url
        self.visited: List[str] = []
        self.scripts: List[str] = []
        self.screenshots: List[Path] = []
        self.on_evaluate: Optional[Callable[["FakePage"], None]] = None

    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(self.dom, (selector,))

    def get_by_role(self, role: str, name: Optional[str] = None, exact: bool = False) -> FakeLocator:
        return FakeLocator(self.dom, (f"role={role}[name={name}]",))

    def get_by_text(self, text: Any) -> FakeLocator:
        return FakeLocator(self.dom, (f"text={text}",))

    async def goto(self, url: str, wait_until: str = "load", timeout: Optional[int] = None) -> None:
        self.visited.append(url)
        self.url = url

    async def wait_for_load_state(self, state: str = "load", timeout: Optional[int] = None) -> None:
        self.dom.actions.append(("load_state", state))

    async def wait_for_timeout(self, milliseconds: int) -> None:
        self.dom.actions.append(("pause", milliseconds))

    async def wait_for_url(self, predicate: Callable[[str], bool], timeout: Optional[int] = None) -> None:
        if not predicate(self.url):
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for url, at {self.url}")

    async def evaluate(self, script: str) -> None:
        self.scripts.append(script)
        self.dom.actions.append(("evaluate",))
        if self.on_evaluate:
            self.on_evaluate(self)

    async def screenshot(self, path: str, full_page: bool = False) -> bytes:
        data = b"\x89PNG\r\n\x1a\n"
        Path(path).write_bytes(data)
        self.screenshots.append(Path(path))
        return data


@pytest.fixture
def dom() -> FakeDom:
    return FakeDom()


@pytest.fixture
def fake_page(dom: FakeDom) -> FakePage:
    return FakePage(dom)


@pytest.fixture
def suite_settings(tmp_path) -> SuiteSettings:
    """Settings pointing at example hosts, artifacts under tmp_path."""
    return SuiteSettings(
        apps={
            "finchoice": AppSettings(
                name="finchoice",
                base_url="https://finchoice.example/uat1",
                paths={"home": "/", "login": "/Reloan/CustomerLanding", "forgot_password": "/ForgotPassword"},
            ),
            "shopify": AppSettings(
                name="shopify",
                base_url="https://shop.example",
                paths={"register": "/account/register", "login": "/account/login"},
            ),
        },
        artifacts=ArtifactSettings(
            evidence_dir=tmp_path / "screenshots",
            output_dir=tmp_path,
        ),
    )
