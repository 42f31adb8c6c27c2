"""probeharness — Reflective runner for optimizer conformance probes."""

from probeharness.catalog import TestMethod, discover_methods
from probeharness.config import HarnessConfig, StressConfig
from probeharness.errors import (
    ACCESS_DENIED,
    BACKGROUND_TASK_ERROR,
    FAILURE_KINDS,
    INVALID_ARGUMENT,
    TARGET_FAILURE,
    CatalogError,
    HarnessError,
    InvocationTargetError,
    StressError,
)
from probeharness.harness import Harness, run_harness
from probeharness.invoker import Failure, InvocationResult, Success, invoke
from probeharness.ordering import sort_methods
from probeharness.reporter import ReportEntry, ResultReporter, TestReport
from probeharness.stress import BackgroundTask, allocation_pressure, run_with_stress

__all__ = [
    # Method Catalog
    "discover_methods",
    "TestMethod",
    "CatalogError",
    # Ordering Sort
    "sort_methods",
    # Invoker
    "invoke",
    "InvocationResult",
    "Success",
    "Failure",
    "InvocationTargetError",
    "INVALID_ARGUMENT",
    "ACCESS_DENIED",
    "TARGET_FAILURE",
    "FAILURE_KINDS",
    # Result Reporter
    "ResultReporter",
    "ReportEntry",
    "TestReport",
    # Stress Variant
    "run_with_stress",
    "BackgroundTask",
    "allocation_pressure",
    "BACKGROUND_TASK_ERROR",
    "StressError",
    # Harness
    "Harness",
    "run_harness",
    "HarnessConfig",
    "StressConfig",
    "HarnessError",
]
