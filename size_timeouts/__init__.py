"""Size-classified per-test timeouts for pytest suites."""

from size_timeouts.categories import (
    ClientTests,
    IntegrationTests,
    LargeTests,
    MediumTests,
    MiscTests,
    SmallTests,
    category,
)
from size_timeouts.checker import check_class_rule
from size_timeouts.common.errors import (
    ClassificationError,
    MissingCategoryError,
    UnrecognizedCategoryError,
)
from size_timeouts.enforcer import PytestTimeoutEnforcer, TimeoutEnforcer
from size_timeouts.policy import TimeoutPolicy
from size_timeouts.rule import ClassTestRule, resolve, with_class_rule

__all__ = [
    "ClassTestRule",
    "ClassificationError",
    "ClientTests",
    "IntegrationTests",
    "LargeTests",
    "MediumTests",
    "MiscTests",
    "MissingCategoryError",
    "PytestTimeoutEnforcer",
    "SmallTests",
    "TimeoutEnforcer",
    "TimeoutPolicy",
    "UnrecognizedCategoryError",
    "category",
    "check_class_rule",
    "resolve",
    "with_class_rule",
]
