"""Stress Variant — runs a probe while a background thread churns memory.

Protocol of :func:`run_with_stress`:

  1. Start exactly one :class:`BackgroundTask` running
     :func:`allocation_pressure`.  It shares no state with the probe.
  2. Call the probe.  Any ``Exception`` it raises is caught here.
  3. On error, append ``"<Type>: <message>"`` to the result text.
  4. Join the background task on every exit path before returning.

The task's lifetime is always contained within the call.  Nothing here
writes to stdout; the text is returned for the harness to report.
"""

import gc
import logging
import threading
import tracemalloc
from typing import Callable, Optional

from probeharness.config import StressConfig
from probeharness.errors import (
    BACKGROUND_TASK_ERROR,
    StressError,
    describe_exception,
)

logger = logging.getLogger(__name__)

# Allocation rounds kept alive at once; older rounds become garbage.
_LIVE_WINDOW = 4


# ── Workload ──


def allocation_pressure(config: StressConfig) -> int:
    """Allocate and drop buffers for ``config.rounds`` rounds.

    Returns the number of bytes allocated in total.
    """
    live: list[list[bytearray]] = []
    allocated = 0
    for round_no in range(1, config.rounds + 1):
        batch = [bytearray(config.chunk_size) for _ in range(config.chunk_count)]
        # Ring of nodes per round, left for the cycle collector.
        nodes = [[buf] for buf in batch]
        for node, following in zip(nodes, nodes[1:] + nodes[:1]):
            node.append(following)
        live.append(batch)
        if len(live) > _LIVE_WINDOW:
            live.pop(0)
        allocated += config.chunk_count * config.chunk_size
        del nodes
        if config.collect_every and round_no % config.collect_every == 0:
            gc.collect()
    return allocated


# ── Background Task ──


class BackgroundTask:
    """A unit of concurrent work with ``start()`` and a guaranteed ``wait()``.

    Errors raised by ``target`` are kept on :attr:`error` instead of being
    raised, and so is a failure to start the thread.
    """

    def __init__(
        self,
        target: Callable[..., object],
        *args: object,
        name: str = "probeharness-stress",
    ) -> None:
        self._target = target
        self._args = args
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)
        self._started = False
        self.result: object = None
        self.error: Optional[BaseException] = None

    def _run(self) -> None:
        try:
            self.result = self._target(*self._args)
        except Exception as exc:
            logger.debug("Background task failed: %s", exc)
            self.error = exc

    def start(self) -> None:
        try:
            self._thread.start()
        except RuntimeError as exc:
            self.error = StressError(f"could not start background task: {exc}")
            logger.warning("%s", self.error)
            return
        self._started = True

    def wait(self) -> None:
        """Block until the task has finished.

        Interrupts received while waiting are swallowed and the join is
        retried; there is no timeout.
        """
        if not self._started:
            return
        while True:
            try:
                self._thread.join()
            except KeyboardInterrupt:
                logger.warning("Interrupted while joining background task; still waiting")
                continue
            return

    def is_alive(self) -> bool:
        return self._thread.is_alive()


# ── Stress Variant ──


def _measured_pressure(config: StressConfig) -> int:
    allocated = allocation_pressure(config)
    if tracemalloc.is_tracing():
        _, peak = tracemalloc.get_traced_memory()
        logger.debug(
            "Stress workload allocated %.1f MB (traced peak %.1f MB)",
            allocated / 1048576, peak / 1048576,
        )
    return allocated


def run_with_stress(
    probe: Callable[..., object],
    *args: object,
    config: Optional[StressConfig] = None,
) -> str:
    """Run ``probe(*args)`` alongside a background allocation workload.

    Returns the probe's result as text, or the error description if it
    raised.  A failure of the workload itself is appended as
    ``[BackgroundTaskError: ...]``.
    """
    task = BackgroundTask(_measured_pressure, config or StressConfig())
    task.start()
    result = ""
    try:
        result += str(probe(*args))
    except Exception as exc:
        result += describe_exception(exc)
    finally:
        task.wait()
    if task.error is not None:
        result += f" [{BACKGROUND_TASK_ERROR}: {describe_exception(task.error)}]"
    return result
