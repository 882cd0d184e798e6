"""Consistency checks for ``CLASS_RULE`` attributes.

A rule stored on a test class must have been resolved for that very class.
Copy/pasted declarations and subclasses inheriting their parent's rule
would otherwise run with the wrong timeout without anyone noticing.
"""

from __future__ import annotations

from size_timeouts.categories import qualified_name
from size_timeouts.common.errors import (
    ClassRuleMismatchError,
    MissingClassRuleError,
    raise_fatal_with_remedy,
)
from size_timeouts.rule import CLASS_RULE_ATTR, ClassTestRule


def find_class_rule(cls: type) -> ClassTestRule | None:
    """Return the ``CLASS_RULE`` visible on ``cls``, or None.

    Raises:
        ClassRuleMismatchError: If the attribute is not a ClassTestRule.
    """
    rule = getattr(cls, CLASS_RULE_ATTR, None)
    if rule is not None and not isinstance(rule, ClassTestRule):
        raise_fatal_with_remedy(
            f"The {CLASS_RULE_ATTR} in {qualified_name(cls)} is a "
            f"{type(rule).__name__}, not a ClassTestRule",
            f"Assign ClassTestRule.for_class({cls.__name__}) or use @with_class_rule.",
            ClassRuleMismatchError,
        )
    return rule


def check_class_rule(cls: type) -> ClassTestRule:
    """Return the class's rule after checking it was resolved for ``cls``.

    Raises:
        MissingClassRuleError: If the class has no ``CLASS_RULE``.
        ClassRuleMismatchError: If the rule belongs to another class.
    """
    rule = find_class_rule(cls)
    if rule is None:
        raise_fatal_with_remedy(
            f"{qualified_name(cls)} does not declare a {CLASS_RULE_ATTR}",
            "Decorate the class with @with_class_rule above its @category.",
            MissingClassRuleError,
        )
    if rule.clazz is not cls:
        raise_fatal_with_remedy(
            f"The {CLASS_RULE_ATTR} in {qualified_name(cls)} is for {qualified_name(rule.clazz)}",
            f"Resolve the rule for {cls.__name__} itself, e.g. with @with_class_rule.",
            ClassRuleMismatchError,
        )
    return rule
