"""Timeout policy for size-classified test classes.

Defines the per-size wall-clock timeouts and the environment overrides
used on slow CI workers.
"""

from __future__ import annotations

import math
import os
from collections.abc import Mapping
from dataclasses import dataclass

from size_timeouts.categories import LargeTests, MediumTests, SmallTests
from size_timeouts.common.errors import warn_soft_degrade

ENV_PREFIX = "SIZE_TIMEOUTS_"


@dataclass(frozen=True, slots=True)
class TimeoutPolicy:
    """Per-size timeouts applied to every test method of a class.

    Attributes:
        small_seconds: Timeout for SmallTests. Supposed to run in ~15s, but a
            stall of ten or twenty seconds on a loaded CI host is common.
        medium_seconds: Timeout for MediumTests (supposed to run in ~50s).
        large_seconds: Timeout for LargeTests, ten minutes.
        lookup_stuck_thread: Ask the enforcer to dump the stacks of stuck
            threads when a test times out.
    """

    small_seconds: float = 60.0
    medium_seconds: float = 180.0
    large_seconds: float = 10 * 60.0
    lookup_stuck_thread: bool = True

    def __post_init__(self) -> None:
        """Validate configuration invariants.

        Raises:
            ValueError: If a timeout is not positive or sizes are out of order.
        """
        if min(self.small_seconds, self.medium_seconds, self.large_seconds) <= 0:
            raise ValueError("timeouts must be > 0")
        if not self.small_seconds <= self.medium_seconds <= self.large_seconds:
            raise ValueError("timeouts must satisfy small <= medium <= large")

    def timeout_for(self, size: type) -> float:
        """Return the timeout in seconds for a size category.

        Raises:
            KeyError: If ``size`` is not SmallTests/MediumTests/LargeTests.
        """
        by_size = {
            SmallTests: self.small_seconds,
            MediumTests: self.medium_seconds,
            LargeTests: self.large_seconds,
        }
        return by_size[size]

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> TimeoutPolicy:
        """Build a policy from ``SIZE_TIMEOUTS_*`` environment variables.

        ``SIZE_TIMEOUTS_SMALL``/``_MEDIUM``/``_LARGE`` replace a single timeout,
        ``SIZE_TIMEOUTS_SCALE`` multiplies all three. Invalid values are ignored
        with a warning; overrides breaking small <= medium <= large are dropped
        while the scale is kept.
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        scale = _positive_float(env, "SCALE", 1.0)
        small = _positive_float(env, "SMALL", defaults.small_seconds) * scale
        medium = _positive_float(env, "MEDIUM", defaults.medium_seconds) * scale
        large = _positive_float(env, "LARGE", defaults.large_seconds) * scale
        try:
            return cls(small_seconds=small, medium_seconds=medium, large_seconds=large)
        except ValueError as exc:
            warn_soft_degrade(f"{ENV_PREFIX}*", str(exc), f"default timeouts x{scale:g}")
            return cls(
                small_seconds=defaults.small_seconds * scale,
                medium_seconds=defaults.medium_seconds * scale,
                large_seconds=defaults.large_seconds * scale,
            )


def _positive_float(env: Mapping[str, str], suffix: str, default: float) -> float:
    name = ENV_PREFIX + suffix
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        warn_soft_degrade(name, f"not a number: {raw!r}", f"{default:g}")
        return default
    if not math.isfinite(value) or value <= 0:
        warn_soft_degrade(name, f"must be > 0, got {raw!r}", f"{default:g}")
        return default
    return value
