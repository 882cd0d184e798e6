"""Tests for the error policy helpers.

Validates that configuration errors carry actionable remediation messages
and that soft-degrade warnings go through loguru.
"""

import pytest

from size_timeouts.common.errors import (
    ClassificationError,
    MissingCategoryError,
    raise_fatal_with_remedy,
    warn_soft_degrade,
)


class TestErrorPolicyHelpers:
    """Test the core error policy helper functions."""

    def test_raise_fatal_with_remedy_format(self):
        """Verify fatal error includes remediation message."""
        with pytest.raises(RuntimeError, match=r"(?s)Test error.*Remediation.*Fix it"):
            raise_fatal_with_remedy("Test error", "Fix it")

    def test_raise_fatal_with_remedy_custom_type(self):
        """Verify the requested error type is raised."""
        with pytest.raises(MissingCategoryError) as exc_info:
            raise_fatal_with_remedy("FooTest is not annotated", "Add one", MissingCategoryError)

        assert isinstance(exc_info.value, ClassificationError)
        assert str(exc_info.value).startswith("FooTest is not annotated")

    def test_warn_soft_degrade_logs_warning(self, loguru_messages):
        """Verify soft degrade logs component, issue and fallback."""
        warn_soft_degrade("test_component", "test issue", "test fallback")

        assert loguru_messages == [
            "Optional component 'test_component' issue: test issue. Fallback: test fallback\n",
        ]
