"""Harness configuration.

Plain dataclasses, no config files and no environment variables.  Defaults
reproduce the fixed behaviour of the probe runner: the ``test`` prefix, the
sample argument ``10`` and two trace locations per failure.
"""

from dataclasses import dataclass, field

DEFAULT_SAMPLE_ARGUMENT = 10
DEFAULT_MAX_FRAMES = 2


@dataclass
class StressConfig:
    """Sizing for the background allocation-pressure workload.

    Attributes:
        rounds: Number of allocation rounds before the workload finishes.
        chunk_count: Buffers allocated per round.
        chunk_size: Size in bytes of each buffer.
        collect_every: Force a ``gc.collect()`` every N rounds (0 disables).
    """

    rounds: int = 200
    chunk_count: int = 64
    chunk_size: int = 4096
    collect_every: int = 50

    def __post_init__(self) -> None:
        for name in ("rounds", "chunk_count", "chunk_size"):
            if getattr(self, name) <= 0:
                raise ValueError(f"StressConfig.{name} must be positive")
        if self.collect_every < 0:
            raise ValueError("StressConfig.collect_every must not be negative")


@dataclass
class HarnessConfig:
    """Settings for a single harness run.

    Attributes:
        prefix: Name prefix a method needs to be picked up as a probe.
        sample_argument: The literal passed to every discovered method.
        max_frames: Cap on trace locations recorded for a target failure.
        stress: Background workload sizing for stress-routed probes.
    """

    prefix: str = "test"
    sample_argument: object = DEFAULT_SAMPLE_ARGUMENT
    max_frames: int = DEFAULT_MAX_FRAMES
    stress: StressConfig = field(default_factory=StressConfig)

    def __post_init__(self) -> None:
        if not self.prefix:
            raise ValueError("HarnessConfig.prefix must not be empty")
        if self.max_frames < 0:
            raise ValueError("HarnessConfig.max_frames must not be negative")
