"""Terminal summary of resolved class timeouts.

Turns the rules and errors gathered during collection into the short
report printed at the end of a pytest session.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import TYPE_CHECKING

from size_timeouts.categories import SIZE_CATEGORIES, SIZE_MARKERS, qualified_name

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from size_timeouts.policy import TimeoutPolicy
    from size_timeouts.rule import ClassTestRule


@dataclass(slots=True)
class ClassTimeoutRecord:
    class_name: str
    size_name: str
    timeout_seconds: float


@dataclass(slots=True)
class MisclassifiedRecord:
    class_name: str
    reason: str

    def format_block(self) -> str:
        return f"{self.class_name}: {self.reason}"


def generate_records(rules: Iterable[ClassTestRule]) -> list[ClassTimeoutRecord]:
    records = [
        ClassTimeoutRecord(
            class_name=qualified_name(r.clazz),
            size_name=SIZE_MARKERS[r.size],
            timeout_seconds=r.timeout_seconds,
        )
        for r in rules
    ]
    return sorted(records, key=lambda r: r.class_name)


def generate_misclassified(errors: Mapping[type, Exception]) -> list[MisclassifiedRecord]:
    """Keep only the first line of each error; the remediation is shown at setup."""
    records = [
        MisclassifiedRecord(class_name=qualified_name(cls), reason=str(exc).splitlines()[0])
        for cls, exc in errors.items()
    ]
    return sorted(records, key=lambda r: r.class_name)


def format_summary(
    records: Iterable[ClassTimeoutRecord],
    misclassified: Iterable[MisclassifiedRecord],
    policy: TimeoutPolicy,
) -> str:
    counts = Counter(r.size_name for r in records)
    header = " ".join(
        f"{SIZE_MARKERS[size]}={policy.timeout_for(size):g}s" for size in SIZE_CATEGORIES
    )
    lines = [f"Size timeouts ({header})"]
    lines.append(
        "  " + ", ".join(f"{counts[SIZE_MARKERS[s]]} {SIZE_MARKERS[s]}" for s in SIZE_CATEGORIES)
    )
    bad = list(misclassified)
    if bad:
        lines.append(f"Misclassified classes ({len(bad)}):")
        for idx, m in enumerate(bad, 1):
            lines.append(f"{idx}) {m.format_block()}")
    return "\n".join(lines)
