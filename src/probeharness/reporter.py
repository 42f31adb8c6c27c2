"""Result Reporter — one printed block per invocation.

Format per entry::

    Test <typeName>; Subtest <methodName>; Result: <text>     (success)
    <Type>: <message>                                         (failure)
    <location 1>
    <location 2>

Writes go to the process's shared text stream synchronously, in call order.
The harness keeps the entries of a run on a :class:`TestReport`.
"""

import sys
from dataclasses import dataclass, field
from typing import Optional, TextIO

from probeharness.invoker import Failure, InvocationResult


# ── Data Classes ──


@dataclass(frozen=True)
class ReportEntry:
    """One ``(typeName, methodName, result)`` triple."""

    type_name: str
    method_name: str
    result: InvocationResult

    def lines(self) -> list[str]:
        """Render this entry as the lines the reporter prints."""
        if isinstance(self.result, Failure):
            return [self.result.description, *self.result.frames]
        return [
            f"Test {self.type_name}; Subtest {self.method_name}; "
            f"Result: {self.result.text}"
        ]


@dataclass
class TestReport:
    """Ordered entries of a harness run, in invocation order."""

    __test__ = False  # not a pytest test class

    entries: list[ReportEntry] = field(default_factory=list)

    @property
    def method_names(self) -> list[str]:
        return [e.method_name for e in self.entries]

    @property
    def succeeded(self) -> int:
        return sum(1 for e in self.entries if e.result.ok)

    @property
    def failed(self) -> int:
        return sum(1 for e in self.entries if not e.result.ok)

    def as_text(self) -> str:
        """Render every entry exactly as printed, one line each."""
        return "\n".join(line for e in self.entries for line in e.lines())

    def as_dict(self) -> dict:
        """JSON-serialisable summary of the run."""
        entries = []
        for e in self.entries:
            item: dict = {
                "type": e.type_name,
                "method": e.method_name,
                "ok": e.result.ok,
            }
            if isinstance(e.result, Failure):
                item["kind"] = e.result.kind
                item["description"] = e.result.description
                item["frames"] = list(e.result.frames)
            else:
                item["result"] = e.result.text
            entries.append(item)
        return {
            "succeeded": self.succeeded,
            "failed": self.failed,
            "entries": entries,
        }


# ── Reporter ──


class ResultReporter:
    """Prints invocation results, one block per call, in call order.

    ``stream`` defaults to ``sys.stdout`` as it is at write time, so output
    capture installed after construction still sees the lines.
    """

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def report(
        self,
        type_name: str,
        method_name: str,
        result: InvocationResult,
    ) -> None:
        """Emit one entry synchronously."""
        entry = ReportEntry(type_name, method_name, result)
        out = self.stream
        for line in entry.lines():
            out.write(line + "\n")
        out.flush()
