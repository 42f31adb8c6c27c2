"""Harness — discovers, orders, invokes and reports the probes of one type.

Wires Method Catalog → Ordering Sort → Invoker → Result Reporter:

  1. Construct one instance of the target type
  2. Discover methods matching the prefix
  3. Sort them by name
  4. For each method: invoke with the sample argument, then report

The loop is sequential.  Every method is invoked exactly once, and a
failure in one method never drops or reorders the entries after it.
"""

import logging
from typing import Optional

from probeharness.catalog import TestMethod, discover_methods
from probeharness.config import HarnessConfig
from probeharness.errors import TARGET_FAILURE, describe_exception
from probeharness.invoker import Failure, InvocationResult, invoke
from probeharness.ordering import sort_methods
from probeharness.reporter import ReportEntry, ResultReporter, TestReport

logger = logging.getLogger(__name__)


class Harness:
    """Runs every probe method declared on ``target_type``.

    Usage::

        report = Harness(TryCatchFieldProbe).run()

    Probe types exposing a ``stress_config`` attribute receive
    ``config.stress`` on the instance before any method runs.
    """

    def __init__(
        self,
        target_type: type,
        config: Optional[HarnessConfig] = None,
        reporter: Optional[ResultReporter] = None,
    ) -> None:
        self.target_type = target_type
        self.config = config or HarnessConfig()
        self.reporter = reporter or ResultReporter()

    @property
    def type_name(self) -> str:
        return self.target_type.__name__.rsplit(".", 1)[-1]

    def plan(self) -> list[TestMethod]:
        """Discovered methods in run order."""
        return sort_methods(discover_methods(self.target_type, self.config.prefix))

    def _new_instance(self) -> object:
        instance = self.target_type()
        if hasattr(instance, "stress_config"):
            instance.stress_config = self.config.stress
        return instance

    def _invoke_one(self, instance: object, method: TestMethod) -> InvocationResult:
        try:
            return invoke(
                instance,
                method,
                self.config.sample_argument,
                self.config.max_frames,
            )
        except Exception as exc:
            logger.error("Unexpected error invoking %s: %s", method.qualified_name, exc)
            return Failure(kind=TARGET_FAILURE, description=describe_exception(exc))

    def run(self) -> TestReport:
        """Run all probes and return the report of this run."""
        methods = self.plan()
        logger.info(
            "Running %d probe(s) on %s", len(methods), self.type_name,
        )
        instance = self._new_instance()

        report = TestReport()
        for method in methods:
            result = self._invoke_one(instance, method)
            logger.debug(
                "%s: %s", method.qualified_name,
                "ok" if result.ok else result.kind,
            )
            report.entries.append(ReportEntry(self.type_name, method.name, result))
            self.reporter.report(self.type_name, method.name, result)

        logger.info(
            "Finished %s: %d succeeded, %d failed",
            self.type_name, report.succeeded, report.failed,
        )
        return report


def run_harness(
    target_type: type,
    config: Optional[HarnessConfig] = None,
    reporter: Optional[ResultReporter] = None,
) -> TestReport:
    """Convenience wrapper: ``Harness(target_type, ...).run()``."""
    return Harness(target_type, config, reporter).run()
