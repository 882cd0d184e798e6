"""The class level timeout rule for size-classified test classes.

Every test class of a suite is expected to resolve a ``ClassTestRule``:
its size category decides the timeout applied to each of its test methods.
Enforcement itself is delegated to a ``TimeoutEnforcer``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, TypeVar

from loguru import logger

from size_timeouts.categories import qualified_name, size_category
from size_timeouts.enforcer import PytestTimeoutEnforcer, TimeoutEnforcer
from size_timeouts.policy import TimeoutPolicy

T = TypeVar("T", bound=type)

CLASS_RULE_ATTR = "CLASS_RULE"


@dataclass(frozen=True)
class ClassTestRule:
    """Timeout rule resolved once per test class.

    Attributes:
        clazz: The test class the rule was built for. Used by the class-rule
            checker to catch rules copied from, or inherited from, another class.
        size: The size category that selected the timeout.
        timeout_seconds: Timeout applied to each test method.
        lookup_stuck_thread: Whether the enforcer reports stuck threads.
        enforcer: Backend applying the timeout; not part of equality.
    """

    clazz: type
    size: type
    timeout_seconds: float
    lookup_stuck_thread: bool = True
    enforcer: TimeoutEnforcer = field(
        default_factory=PytestTimeoutEnforcer,
        compare=False,
        repr=False,
    )

    @classmethod
    def for_class(
        cls,
        clazz: type,
        *,
        policy: TimeoutPolicy | None = None,
        enforcer: TimeoutEnforcer | None = None,
    ) -> ClassTestRule:
        """Resolve the rule for a test class.

        Raises:
            MissingCategoryError: If ``clazz`` declares no categories.
            UnrecognizedCategoryError: If none of them is a size category.
        """
        policy = policy if policy is not None else TimeoutPolicy.from_env()
        size = size_category(clazz)
        seconds = policy.timeout_for(size)
        logger.debug("Resolved {} as {} -> {}s", qualified_name(clazz), size.__name__, seconds)
        return cls(
            clazz=clazz,
            size=size,
            timeout_seconds=seconds,
            lookup_stuck_thread=policy.lookup_stuck_thread,
            enforcer=enforcer if enforcer is not None else PytestTimeoutEnforcer(),
        )

    def apply(self, base: Any) -> Any:
        """Wrap one test body (item, function or class) with this rule's timeout."""
        return self.enforcer.wrap(self.timeout_seconds, self.lookup_stuck_thread, base)


def resolve(
    clazz: type,
    *,
    policy: TimeoutPolicy | None = None,
    enforcer: TimeoutEnforcer | None = None,
) -> ClassTestRule:
    return ClassTestRule.for_class(clazz, policy=policy, enforcer=enforcer)


def with_class_rule(
    cls: T | None = None,
    *,
    policy: TimeoutPolicy | None = None,
    enforcer: TimeoutEnforcer | None = None,
) -> T | Callable[[T], T]:
    """Class decorator storing the resolved rule as ``cls.CLASS_RULE``.

    Must sit above ``@category`` so the categories are registered first::

        @with_class_rule
        @category(SmallTests)
        class TestParser: ...
    """

    def decorate(klass: T) -> T:
        setattr(klass, CLASS_RULE_ATTR, resolve(klass, policy=policy, enforcer=enforcer))
        return klass

    if cls is None:
        return decorate
    return decorate(cls)
