"""
================================================================================
Smart Locator with Ordered Fallback Strategies
================================================================================

Intent-based element location system with:
    - A declarative, ordered strategy list per semantic field
    - A single bounded wait on "any element matching any strategy"
    - First-strategy-wins narrowing to exactly one element
    - Lazy handles that re-resolve at the moment of interaction
    - Usage analytics for maintenance insights (fallback report)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import reduce
from typing import Any, Dict, List, Optional, Tuple, Union

from loguru import logger
from playwright.async_api import Locator, Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError


Scope = Union[Page, Locator]


class ElementNotFoundError(Exception):
    """Raised when no strategy of a field matches within the wait bound."""

    def __init__(self, intent: str, tried: List[str], timeout: Optional[int] = None):
        self.intent = intent
        self.tried = list(tried)
        self.timeout = timeout
        bound = f" within {timeout} ms" if timeout is not None else ""
        message = (
            f"❌ No element found for '{intent}'{bound}. Strategies tried:\n"
            + "\n".join(f"  - {t}" for t in self.tried)
        )
        super().__init__(message)


RESOLVABLE_STATES = ("visible", "attached")


def _quote(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def _in_state(locator: Locator, state: str) -> Locator:
    if state == "visible":
        return locator.filter(visible=True)
    return locator


# =============================================================================
# Strategies
# =============================================================================

@dataclass(frozen=True)
class Strategy:
    """One candidate way of locating an element satisfying an intent."""

    def build(self, scope: Scope) -> Locator:
        raise NotImplementedError

    def describe(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.describe()


@dataclass(frozen=True)
class Css(Strategy):
    """Raw Playwright/CSS selector."""
    selector: str

    def build(self, scope: Scope) -> Locator:
        return scope.locator(self.selector)

    def describe(self) -> str:
        return f"css={self.selector}"


@dataclass(frozen=True)
class AttributeContains(Strategy):
    """Case-insensitive attribute substring, e.g. input[name*="mobile" i]."""
    attribute: str
    value: str
    tag: str = "input"

    @property
    def selector(self) -> str:
        return f'{self.tag}[{self.attribute}*="{_quote(self.value)}" i]'

    def build(self, scope: Scope) -> Locator:
        return scope.locator(self.selector)

    def describe(self) -> str:
        return f"attribute-contains={self.selector}"


@dataclass(frozen=True)
class ExactAttribute(Strategy):
    attribute: str
    value: str
    tag: str = "input"

    @property
    def selector(self) -> str:
        return f'{self.tag}[{self.attribute}="{_quote(self.value)}"]'

    def build(self, scope: Scope) -> Locator:
        return scope.locator(self.selector)

    def describe(self) -> str:
        return f"attribute={self.selector}"


@dataclass(frozen=True)
class InputType(Strategy):
    input_type: str
    tag: str = "input"

    @property
    def selector(self) -> str:
        return f'{self.tag}[type="{_quote(self.input_type)}"]'

    def build(self, scope: Scope) -> Locator:
        return scope.locator(self.selector)

    def describe(self) -> str:
        return f"type={self.selector}"


@dataclass(frozen=True)
class Role(Strategy):
    """ARIA role, optionally narrowed by accessible name (substring match)."""
    role: str
    name: Optional[str] = None
    exact: bool = False

    def build(self, scope: Scope) -> Locator:
        if self.name is None:
            return scope.get_by_role(self.role)
        return scope.get_by_role(self.role, name=self.name, exact=self.exact)

    def describe(self) -> str:
        if self.name is None:
            return f"role={self.role}"
        return f"role={self.role}[name={self.name!r}]"


@dataclass(frozen=True)
class Text(Strategy):
    """Visible text, optionally restricted to a tag (button:has-text("Next"))."""
    text: str
    tag: Optional[str] = None

    def build(self, scope: Scope) -> Locator:
        if self.tag:
            return scope.locator(f'{self.tag}:has-text("{_quote(self.text)}")')
        return scope.get_by_text(self.text)

    def describe(self) -> str:
        if self.tag:
            return f'text={self.tag}:has-text("{self.text}")'
        return f"text={self.text!r}"


@dataclass(frozen=True)
class FieldReference:
    """
    A semantic field name plus its ordered candidate strategies.

    Attributes:
        intent: Human-readable intent, e.g. "mobile number input"
        strategies: Candidate strategies in priority order
    """
    intent: str
    strategies: Tuple[Strategy, ...]

    def __post_init__(self) -> None:
        if not self.strategies:
            raise ValueError(f"Field '{self.intent}' declares no locator strategies")

    @classmethod
    def of(cls, intent: str, *strategies: Strategy) -> "FieldReference":
        return cls(intent=intent, strategies=tuple(strategies))


@dataclass
class LocatorHealth:
    """
    Tracks which strategy resolved an intent.

    Attributes:
        element_name: Intent of the resolved field
        primary_selector: Description of the preferred strategy
        used_fallback: Whether a non-primary strategy won
        fallback_name: Position of the winning fallback (if any)
        fallback_selector: Description of the winning fallback (if any)
    """
    element_name: str
    primary_selector: str
    used_fallback: bool = False
    fallback_name: Optional[str] = None
    fallback_selector: Optional[str] = None


# =============================================================================
# Resolver
# =============================================================================

class SmartLocator:
    """
    Resolves FieldReferences against a live page (or a scoping locator).

    Resolution algorithm:
        1. Build one Playwright locator per strategy, keeping only elements
           in the awaited state (visible by default)
        2. Wait (bounded) until the union of those locators has a match
        3. Pick the first strategy, in declaration order, with >= 1 match
        4. Narrow that strategy to its first matching element

    Usage:
        >>> smart = SmartLocator(page, timeout=10000)
        >>> email = FieldReference.of("email input", InputType("email"))
        >>> await smart.fill(email, "someone@example.com")
    """

    def __init__(self, scope: Scope, timeout: int = 10000):
        """
        Initialize SmartLocator.

        Args:
            scope: Playwright Page, or a Locator to search within
            timeout: Default wait bound in milliseconds
        """
        self.scope = scope
        self.timeout = timeout
        self._health_records: List[LocatorHealth] = []
        self._fallback_used: Dict[str, LocatorHealth] = {}

    def handle(self, field: FieldReference) -> "FieldHandle":
        """Return a lazy handle; nothing is queried until it is used."""
        return FieldHandle(self, field)

    def candidates(self, field: FieldReference) -> List[Tuple[Strategy, Locator]]:
        return [(strategy, strategy.build(self.scope)) for strategy in field.strategies]

    def collect(self, field: FieldReference) -> Locator:
        """Locator matching every element of every strategy (document order)."""
        locators = [locator for _, locator in self.candidates(field)]
        return reduce(lambda combined, nxt: combined.or_(nxt), locators)

    async def resolve(
        self,
        field: FieldReference,
        timeout: Optional[int] = None,
        state: str = "visible",
    ) -> Locator:
        """
        Resolve a field to exactly one element.

        Args:
            field: Field to resolve
            timeout: Wait bound in milliseconds (defaults to the instance bound)
            state: "visible" (actions, assertions) or "attached" (attribute reads)

        Returns:
            Locator narrowed to one element in `state`

        Raises:
            ElementNotFoundError: When no strategy matches within the bound
            ValueError: For any other `state`
        """
        if state not in RESOLVABLE_STATES:
            raise ValueError(f"Cannot resolve '{field.intent}' to an element in state '{state}'")
        timeout = self.timeout if timeout is None else timeout
        candidates = [
            (strategy, _in_state(locator, state)) for strategy, locator in self.candidates(field)
        ]
        tried = [strategy.describe() for strategy, _ in candidates]

        # Waited-on and returned element are both in `state`
        union = reduce(lambda combined, nxt: combined.or_(nxt), [loc for _, loc in candidates])
        try:
            await union.first.wait_for(state=state, timeout=timeout)
        except PlaywrightTimeoutError as e:
            error = ElementNotFoundError(field.intent, tried, timeout)
            logger.error(str(error))
            raise error from e

        for position, (strategy, locator) in enumerate(candidates):
            if await locator.count() > 0:
                self._record(field, position, strategy)
                return locator.first

        # Union matched but every strategy is now empty: DOM changed in between
        error = ElementNotFoundError(field.intent, tried, timeout)
        logger.error(str(error))
        raise error

    def _record(self, field: FieldReference, position: int, strategy: Strategy) -> None:
        primary = field.strategies[0].describe()
        used_fallback = position > 0
        health = LocatorHealth(
            element_name=field.intent,
            primary_selector=primary,
            used_fallback=used_fallback,
            fallback_name=f"fallback_{position}" if used_fallback else None,
            fallback_selector=strategy.describe() if used_fallback else None,
        )
        self._health_records.append(health)

        if used_fallback:
            logger.warning(
                f"⚠️ Element '{field.intent}' used fallback: "
                f"fallback_{position} -> {strategy.describe()}"
            )
            self._fallback_used[field.intent] = health
        else:
            logger.debug(f"✅ Element '{field.intent}' found: {primary}")

    async def click(
        self,
        field: FieldReference,
        timeout: Optional[int] = None,
        **kwargs: Any,
    ) -> None:
        timeout = self.timeout if timeout is None else timeout
        locator = await self.resolve(field, timeout=timeout)
        await locator.click(timeout=timeout, **kwargs)

    async def fill(
        self,
        field: FieldReference,
        value: str,
        timeout: Optional[int] = None,
        **kwargs: Any,
    ) -> None:
        timeout = self.timeout if timeout is None else timeout
        locator = await self.resolve(field, timeout=timeout)
        await locator.fill(value, timeout=timeout, **kwargs)

    async def get_text(self, field: FieldReference, timeout: Optional[int] = None) -> str:
        locator = await self.resolve(field, timeout=timeout)
        return await locator.text_content() or ""

    async def is_visible(self, field: FieldReference, timeout: int = 2000) -> bool:
        """
        Check if a field is visible within a short bound.

        Returns:
            True if visible, False when nothing matched in time
        """
        try:
            locator = await self.resolve(field, timeout=timeout)
        except ElementNotFoundError:
            return False
        return await locator.is_visible()

    @property
    def health_records(self) -> List[LocatorHealth]:
        return list(self._health_records)

    def get_health_report(self) -> str:
        """
        Generate locator health report.

        Lists intents that were resolved by a fallback strategy
        (maintenance candidates).
        """
        if not self._fallback_used:
            return "✅ All elements used primary locators. No maintenance needed."

        report_lines = [
            "⚠️ Locator Health Report - Fallbacks Used:",
            "",
            "The following elements used fallback locators.",
            "Consider updating the primary selectors:",
            "",
        ]

        for element_name, health in self._fallback_used.items():
            report_lines.extend([
                f"  [{element_name}]",
                f"    Failed primary: {health.primary_selector}",
                f"    Used: {health.fallback_name} -> {health.fallback_selector}",
                "",
            ])

        return "\n".join(report_lines)


class FieldHandle:
    """Lazy handle on one field; every call re-resolves against the live DOM."""

    def __init__(self, smart: SmartLocator, field: FieldReference):
        self.smart = smart
        self.field = field

    @property
    def intent(self) -> str:
        return self.field.intent

    async def wait_for(self, state: str = "visible", timeout: Optional[int] = None) -> None:
        await self.smart.resolve(self.field, timeout=timeout, state=state)

    async def fill(self, value: str, timeout: Optional[int] = None) -> None:
        await self.smart.fill(self.field, value, timeout=timeout)

    async def click(self, timeout: Optional[int] = None) -> None:
        await self.smart.click(self.field, timeout=timeout)

    async def is_visible(self, timeout: int = 2000) -> bool:
        return await self.smart.is_visible(self.field, timeout=timeout)

    async def get_attribute(self, name: str, timeout: Optional[int] = None) -> Optional[str]:
        locator = await self.smart.resolve(self.field, timeout=timeout, state="attached")
        return await locator.get_attribute(name)

    def __repr__(self) -> str:
        return f"FieldHandle({self.field.intent!r})"


__all__ = [
    "SmartLocator",
    "FieldHandle",
    "FieldReference",
    "ElementNotFoundError",
    "LocatorHealth",
    "Strategy",
    "Css",
    "AttributeContains",
    "ExactAttribute",
    "InputType",
    "Role",
    "Text",
]
