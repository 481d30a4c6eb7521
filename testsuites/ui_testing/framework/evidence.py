"""
================================================================================
Evidence Capture
================================================================================

Full-page screenshots keyed by (scenario id, step id) for audit trails.

Layout:
    <evidence_dir>/<scenario_id>/<scenario_id>-<step_id>.png

Each recorder writes every output file at most once, comparing pairs after
sanitising; the directory tree is append-only and never read back by the suite.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List

from loguru import logger
from playwright.async_api import Page

from journey_tools.report_tools.allure_utils import attach_png


_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


class EvidenceError(Exception):
    """Raised when an evidence record cannot be written."""
    pass


def safe_name(identifier: str) -> str:
    """Make an identifier usable as a file/directory name."""
    cleaned = _UNSAFE_CHARS.sub("_", identifier.strip()).strip("._")
    if not cleaned:
        raise EvidenceError(f"Identifier {identifier!r} has no usable characters")
    return cleaned


@dataclass(frozen=True)
class EvidenceRecord:
    scenario_id: str
    step_id: str
    path: Path


class EvidenceRecorder:
    """
    Captures scenario/step screenshots for one browser page.

    Usage:
        evidence = EvidenceRecorder(page, Path("test-results/screenshots"))
        await evidence.capture("TC_FP_002", "01-login-page")
    """

    def __init__(
        self,
        page: Page,
        root_dir: Path,
        full_page: bool = True,
        attach_to_allure: bool = True,
    ):
        self.page = page
        self.root_dir = Path(root_dir)
        self.full_page = full_page
        self.attach_to_allure = attach_to_allure
        self._records: Dict[Path, EvidenceRecord] = {}

    def path_for(self, scenario_id: str, step_id: str) -> Path:
        scenario = safe_name(scenario_id)
        step = safe_name(step_id)
        return self.root_dir / scenario / f"{scenario}-{step}.png"

    async def capture(self, scenario_id: str, step_id: str) -> EvidenceRecord:
        """
        Write a screenshot for (scenario_id, step_id).

        Raises:
            EvidenceError: The file for this pair was already written by this
                recorder (ids are compared after sanitising), or the
                identifiers are unusable
        """
        path = self.path_for(scenario_id, step_id)
        previous = self._records.get(path)
        if previous is not None:
            raise EvidenceError(
                f"Evidence for {scenario_id}/{step_id} would overwrite "
                f"{previous.scenario_id}/{previous.step_id}: {path}"
            )

        path.parent.mkdir(parents=True, exist_ok=True)
        await self.page.screenshot(path=str(path), full_page=self.full_page)

        record = EvidenceRecord(scenario_id=scenario_id, step_id=step_id, path=path)
        self._records[path] = record

        if self.attach_to_allure:
            attach_png(path, name=f"{scenario_id} / {step_id}")

        logger.debug(f"Evidence saved: {path}")
        return record

    @property
    def records(self) -> List[EvidenceRecord]:
        return list(self._records.values())


__all__ = [
    "EvidenceRecorder",
    "EvidenceRecord",
    "EvidenceError",
    "safe_name",
]
