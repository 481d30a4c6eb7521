"""
================================================================================
Allure Report Utilities
================================================================================

Helpers for enriching Allure reports and summarising a results directory.

Features:
- JSON / PNG attachment helpers
- Observation records for informational (non-asserting) scenarios
- Result summary used by the test runner

================================================================================
"""

import json
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Union

import allure
from loguru import logger


# ================================================================================
# Attachment Helpers
# ================================================================================

def attach_json(data: Any, name: str = "Data"):
    """
    Attach JSON data to Allure report.

    Args:
        data: Data to attach (will be JSON serialized)
        name: Attachment name
    """
    json_str = json.dumps(data, indent=2, default=str)
    allure.attach(
        json_str,
        name=name,
        attachment_type=allure.attachment_type.JSON
    )


def attach_png(source: Union[bytes, str, Path], name: str = "Screenshot"):
    """
    Attach a PNG to the Allure report.

    Args:
        source: Raw PNG bytes, or a path to a PNG file
        name: Attachment name
    """
    if isinstance(source, (str, Path)):
        allure.attach.file(
            str(source),
            name=name,
            attachment_type=allure.attachment_type.PNG
        )
        return
    allure.attach(
        source,
        name=name,
        attachment_type=allure.attachment_type.PNG
    )


def attach_observation(scenario_id: str, facts: Dict[str, Any]):
    """
    Record what a scenario observed without asserting on it.

    Used where the remote application's behaviour is documented rather than
    contractual (e.g. optional registration fields).
    """
    summary = ", ".join(f"{k}={v}" for k, v in facts.items())
    logger.info(f"📝 {scenario_id} observed: {summary}")
    attach_json({"scenario": scenario_id, **facts}, name=f"Observation: {scenario_id}")


# ================================================================================
# Report Processing
# ================================================================================

@dataclass
class TestResultSummary:
    """Summary of test execution results."""
    __test__ = False

    total: int = 0
    passed: int = 0
    failed: int = 0
    broken: int = 0
    skipped: int = 0
    unknown: int = 0
    duration_ms: int = 0
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    @property
    def pass_rate(self) -> float:
        """Calculate pass rate percentage."""
        if self.total == 0:
            return 0.0
        return (self.passed / self.total) * 100

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "broken": self.broken,
            "skipped": self.skipped,
            "unknown": self.unknown,
            "pass_rate": f"{self.pass_rate:.2f}%",
            "duration_ms": self.duration_ms,
            "timestamp": self.timestamp,
        }


def summarize_results(results_dir: Path) -> TestResultSummary:
    """
    Build a summary from the `*-result.json` files of an Allure results dir.

    With whole-scenario retries the same test can appear several times; the
    latest result per `historyId` wins.
    """
    latest: Dict[str, Dict[str, Any]] = {}
    for result_file in Path(results_dir).glob("*-result.json"):
        try:
            with open(result_file, encoding="utf-8") as f:
                result = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to parse {result_file}: {e}")
            continue
        key = result.get("historyId") or result.get("uuid") or result_file.name
        previous = latest.get(key)
        if previous is None or result.get("stop", 0) >= previous.get("stop", 0):
            latest[key] = result

    summary = TestResultSummary(total=len(latest))
    for result in latest.values():
        status = result.get("status", "unknown")
        if status == "passed":
            summary.passed += 1
        elif status == "failed":
            summary.failed += 1
        elif status == "broken":
            summary.broken += 1
        elif status == "skipped":
            summary.skipped += 1
        else:
            summary.unknown += 1
        summary.duration_ms += result.get("stop", 0) - result.get("start", 0)

    return summary


__all__ = [
    "attach_json",
    "attach_png",
    "attach_observation",
    "TestResultSummary",
    "summarize_results",
]
