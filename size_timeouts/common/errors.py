"""Error handling policy helpers.

Provides the configuration error types raised while classifying test
classes, plus consistent error raising and warning patterns.
"""

from __future__ import annotations

from loguru import logger


class ClassificationError(ValueError):
    """A test class cannot be given a size-based timeout."""


class MissingCategoryError(ClassificationError):
    """The test class declares no categories at all."""


class UnrecognizedCategoryError(ClassificationError):
    """The test class declares categories, but none of them is a size."""


class ClassRuleError(ValueError):
    """A test class carries a missing or foreign ``CLASS_RULE``."""


class MissingClassRuleError(ClassRuleError):
    pass


class ClassRuleMismatchError(ClassRuleError):
    pass


def raise_fatal_with_remedy(
    msg: str,
    remedy: str,
    error_cls: type[Exception] = RuntimeError,
) -> None:
    """Raise an error with an actionable remediation message.

    Parameters
    ----------
    msg : str
        Primary error description
    remedy : str
        Concrete steps to fix the issue
    error_cls : type[Exception]
        Exception type to raise, RuntimeError unless a more specific
        configuration error applies
    """
    full_msg = f"{msg}\n\nRemediation: {remedy}"
    raise error_cls(full_msg)


def warn_soft_degrade(component: str, issue: str, fallback: str) -> None:
    """Log a warning for optional configuration failures with soft degradation.

    Parameters
    ----------
    component : str
        Name of the optional component or setting
    issue : str
        Description of what failed
    fallback : str
        What behavior will occur instead
    """
    logger.warning(
        "Optional component '{}' issue: {}. Fallback: {}",
        component,
        issue,
        fallback,
    )
