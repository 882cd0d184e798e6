"""
Common utilities for the size_timeouts package.

This module provides the error hierarchy, error policy helpers and
the loguru logging setup shared by the rule, checker and plugin.
"""

from size_timeouts.common.errors import (
    ClassificationError,
    ClassRuleError,
    ClassRuleMismatchError,
    MissingCategoryError,
    MissingClassRuleError,
    UnrecognizedCategoryError,
    raise_fatal_with_remedy,
    warn_soft_degrade,
)
from size_timeouts.common.logging import configure_logging

__all__ = [  # noqa: RUF022 - Grouped by source module for clarity
    # Errors (from .errors)
    "ClassificationError",
    "MissingCategoryError",
    "UnrecognizedCategoryError",
    "ClassRuleError",
    "MissingClassRuleError",
    "ClassRuleMismatchError",
    "raise_fatal_with_remedy",
    "warn_soft_degrade",
    # Logging (from .logging)
    "configure_logging",
]
