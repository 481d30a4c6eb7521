"""
Test suites package.

Kept importable so page objects, the framework and `run_tests.py` share one
namespace:
  - testsuites.ui_testing.framework: locator resolution, pages base, config, evidence
  - testsuites.ui_testing.pages: page objects of the journeys under test
  - testsuites.ui_testing.tests: live browser scenarios
  - testsuites.unit: offline tests of the framework

No credentials live here; see `.env.example`.
"""
