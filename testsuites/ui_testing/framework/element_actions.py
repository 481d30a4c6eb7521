# ================================================================================
# Element Actions Module
# ================================================================================
#
# Composite element interactions built on top of SmartLocator.
#
# Key Features:
#   - Two-variant dropdown selection (native <select>, then custom widget)
#   - Typed selection outcomes instead of exception-driven fallbacks
#   - Allure step integration
#
# ================================================================================

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

import allure
from loguru import logger
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator

from .smart_locator import ElementNotFoundError, FieldReference, SmartLocator


class SelectOutcome(str, Enum):
    """Which dropdown variant (if any) selected the option."""
    NATIVE = "native"
    CUSTOM = "custom"
    NONE = "none"


@dataclass
class SelectionResult:
    """Result of a dropdown selection attempt sequence."""
    label: str
    outcome: SelectOutcome = SelectOutcome.NONE
    attempts: List[str] = field(default_factory=list)

    @property
    def selected(self) -> bool:
        return self.outcome is not SelectOutcome.NONE


class DropdownSelectionError(ElementNotFoundError):
    """Raised when neither dropdown variant could select the label."""

    def __init__(self, intent: str, result: SelectionResult):
        self.result = result
        super().__init__(
            f"{intent} -> option '{result.label}'",
            result.attempts,
        )


class ElementActions:
    """
    Composite interactions that need more than one element.

    Example:
        actions = ElementActions(smart, option_timeout=3000)
        result = await actions.select_option_by_label(employment_status, "Permanent")
        assert result.outcome in (SelectOutcome.NATIVE, SelectOutcome.CUSTOM)
    """

    OPTION_SELECTOR = '[role="option"]'

    def __init__(self, smart: SmartLocator, option_timeout: int = 3000):
        """
        Args:
            smart: Resolver bound to the page under test
            option_timeout: Bound for each dropdown variant, in milliseconds
        """
        self.smart = smart
        self.option_timeout = option_timeout

    async def select_option_by_label(
        self,
        field_ref: FieldReference,
        label: str,
        timeout: Optional[int] = None,
    ) -> SelectionResult:
        """
        Select `label` in a dropdown, native first, then custom widget.

        Args:
            field_ref: The dropdown (a <select> or a combobox trigger)
            label: Visible option text
            timeout: Bound for resolving the dropdown itself

        Returns:
            SelectionResult with the variant that succeeded

        Raises:
            ElementNotFoundError: The dropdown itself could not be resolved
            DropdownSelectionError: Both variants failed
        """
        with allure.step(f"Select '{label}' in {field_ref.intent}"):
            dropdown = await self.smart.resolve(field_ref, timeout=timeout)
            result = SelectionResult(label=label)

            for outcome, attempt in (
                (SelectOutcome.NATIVE, self._select_native),
                (SelectOutcome.CUSTOM, self._select_custom),
            ):
                error = await attempt(dropdown, label)
                if error is None:
                    result.outcome = outcome
                    logger.debug(
                        f"Selected '{label}' in '{field_ref.intent}' via {outcome.value} dropdown"
                    )
                    return result
                result.attempts.append(f"{outcome.value}: {error}")
                logger.debug(f"{outcome.value} dropdown attempt failed for '{field_ref.intent}': {error}")

            logger.error(f"❌ Could not select '{label}' in '{field_ref.intent}'")
            raise DropdownSelectionError(field_ref.intent, result)

    async def _select_native(self, dropdown: Locator, label: str) -> Optional[str]:
        try:
            await dropdown.select_option(label=label, timeout=self.option_timeout)
        except PlaywrightError as e:
            return str(e).splitlines()[0] if str(e) else type(e).__name__
        return None

    async def _select_custom(self, dropdown: Locator, label: str) -> Optional[str]:
        scope = self.smart.scope
        try:
            await dropdown.click(timeout=self.option_timeout)
            option = scope.locator(self.OPTION_SELECTOR).filter(has_text=label).first
            await option.click(timeout=self.option_timeout)
        except PlaywrightError as e:
            return str(e).splitlines()[0] if str(e) else type(e).__name__
        return None


__all__ = [
    "ElementActions",
    "SelectOutcome",
    "SelectionResult",
    "DropdownSelectionError",
]
