"""Tests for the Stress Variant.

Tests cover:
  - Background task lifetime contained within run_with_stress()
  - Probe errors folded into the returned text
  - Background workload errors folded into the returned text
  - Join retried after interrupts; start failures recorded
  - StressConfig validation and the allocation workload
"""

import threading
import time
from unittest.mock import MagicMock

import pytest

from probeharness import stress
from probeharness.config import StressConfig
from probeharness.errors import BACKGROUND_TASK_ERROR, StressError
from probeharness.stress import BackgroundTask, allocation_pressure, run_with_stress


# ── Fixtures ──


@pytest.fixture
def small_config():
    return StressConfig(rounds=5, chunk_count=4, chunk_size=64, collect_every=2)


@pytest.fixture
def recorded_tasks(monkeypatch):
    """Capture every BackgroundTask that run_with_stress() creates."""
    created = []

    class _Recording(BackgroundTask):
        def __init__(self, *args, **kwargs):
            super().__init__(*args, **kwargs)
            created.append(self)

    monkeypatch.setattr(stress, "BackgroundTask", _Recording)
    return created


def _boom(n):
    raise ArithmeticError(f"bad value {n}")


# ── Stress Variant Tests ──


class TestRunWithStress:
    """Test the fork-and-join protocol of run_with_stress()."""

    def test_returns_probe_result(self, small_config):
        assert run_with_stress(lambda n: n + 96, 10, config=small_config) == "106"

    def test_probe_error_becomes_text(self, small_config):
        text = run_with_stress(_boom, 10, config=small_config)
        assert text == "ArithmeticError: bad value 10"

    def test_exactly_one_task_per_call(self, small_config, recorded_tasks):
        run_with_stress(lambda n: n, 1, config=small_config)
        assert len(recorded_tasks) == 1

    def test_task_joined_after_success(self, small_config, recorded_tasks):
        run_with_stress(lambda n: n, 1, config=small_config)
        assert not recorded_tasks[0].is_alive()
        assert recorded_tasks[0].result == 5 * 4 * 64

    def test_task_joined_after_failure(self, small_config, recorded_tasks):
        text = run_with_stress(_boom, 1, config=small_config)
        assert text
        assert not recorded_tasks[0].is_alive()

    def test_task_started_before_probe(self, monkeypatch, recorded_tasks):
        release = threading.Event()
        seen = {}

        def slow_workload(config):
            release.wait(5)
            return 0

        def probe(n):
            seen["alive"] = recorded_tasks[0].is_alive()
            release.set()
            return n

        monkeypatch.setattr(stress, "_measured_pressure", slow_workload)
        assert run_with_stress(probe, 7) == "7"
        assert seen["alive"] is True
        assert not recorded_tasks[0].is_alive()

    def test_waits_for_slow_workload(self, monkeypatch, recorded_tasks):
        def slow_workload(config):
            time.sleep(0.1)
            return 0

        monkeypatch.setattr(stress, "_measured_pressure", slow_workload)
        assert run_with_stress(lambda n: n, 3) == "3"
        assert not recorded_tasks[0].is_alive()

    def test_background_error_appended(self, monkeypatch):
        def failing_workload(config):
            raise MemoryError("heap exhausted")

        monkeypatch.setattr(stress, "_measured_pressure", failing_workload)
        text = run_with_stress(lambda n: n, 10)
        assert text == f"10 [{BACKGROUND_TASK_ERROR}: MemoryError: heap exhausted]"

    def test_non_exception_probe_errors_propagate_after_join(
        self, small_config, recorded_tasks,
    ):
        def interrupted(n):
            raise SystemExit(3)

        with pytest.raises(SystemExit):
            run_with_stress(interrupted, 1, config=small_config)
        assert not recorded_tasks[0].is_alive()

    def test_never_writes_output(self, small_config, capsys):
        run_with_stress(_boom, 1, config=small_config)
        captured = capsys.readouterr()
        assert captured.out == ""


# ── Background Task Tests ──


class TestBackgroundTask:
    """Test BackgroundTask start/wait semantics."""

    def test_result_and_no_error(self):
        task = BackgroundTask(lambda a, b: a * b, 6, 7)
        task.start()
        task.wait()
        assert task.result == 42
        assert task.error is None

    def test_error_captured(self):
        task = BackgroundTask(_boom, 3)
        task.start()
        task.wait()
        assert isinstance(task.error, ArithmeticError)

    def test_wait_before_start_returns(self):
        task = BackgroundTask(lambda: None)
        task.wait()
        assert not task.is_alive()

    def test_wait_retries_after_interrupt(self):
        task = BackgroundTask(lambda: None)
        task._thread = MagicMock()
        task._thread.join.side_effect = [KeyboardInterrupt, None]
        task._started = True
        task.wait()
        assert task._thread.join.call_count == 2

    def test_start_failure_recorded(self):
        task = BackgroundTask(lambda: None)
        task._thread = MagicMock()
        task._thread.start.side_effect = RuntimeError("can't start new thread")
        task.start()
        assert isinstance(task.error, StressError)
        task.wait()
        task._thread.join.assert_not_called()


# ── Workload Tests ──


class TestAllocationPressure:
    """Test the allocation workload and its config."""

    def test_returns_bytes_allocated(self, small_config):
        assert allocation_pressure(small_config) == 5 * 4 * 64

    def test_collect_disabled(self):
        config = StressConfig(rounds=3, chunk_count=2, chunk_size=8, collect_every=0)
        assert allocation_pressure(config) == 48

    @pytest.mark.parametrize("field_name", ["rounds", "chunk_count", "chunk_size"])
    def test_rejects_non_positive(self, field_name):
        with pytest.raises(ValueError, match=field_name):
            StressConfig(**{field_name: 0})

    def test_rejects_negative_collect_every(self):
        with pytest.raises(ValueError, match="collect_every"):
            StressConfig(collect_every=-1)
