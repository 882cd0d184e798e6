"""Tests for category declarations and size lookup."""

from __future__ import annotations

import pytest

from size_timeouts.categories import (
    ClientTests,
    IntegrationTests,
    LargeTests,
    MediumTests,
    MiscTests,
    SmallTests,
    category,
    declared_categories,
    qualified_name,
    size_category,
)
from size_timeouts.common.errors import (
    ClassificationError,
    MissingCategoryError,
    UnrecognizedCategoryError,
)


class TestCategoryDeclaration:
    def test_declaration_order_is_kept(self):
        @category(ClientTests, SmallTests)
        class FooTest:
            pass

        assert declared_categories(FooTest) == (ClientTests, SmallTests)

    def test_undeclared_class_has_no_categories(self):
        class BazTest:
            pass

        assert declared_categories(BazTest) is None

    def test_empty_declaration_is_not_missing(self):
        @category()
        class EmptyTest:
            pass

        assert declared_categories(EmptyTest) == ()

    def test_subclass_inherits_declaration(self):
        @category(MediumTests)
        class BaseTest:
            pass

        class DerivedTest(BaseTest):
            pass

        assert declared_categories(DerivedTest) == (MediumTests,)

    def test_subclass_can_redeclare(self):
        @category(MediumTests)
        class BaseTest:
            pass

        @category(LargeTests)
        class DerivedTest(BaseTest):
            pass

        assert declared_categories(DerivedTest) == (LargeTests,)
        assert declared_categories(BaseTest) == (MediumTests,)

    def test_declaring_twice_raises(self):
        class TwiceTest:
            pass

        category(SmallTests)(TwiceTest)
        with pytest.raises(ValueError, match="already declares categories"):
            category(LargeTests)(TwiceTest)

    def test_non_class_category_raises(self):
        with pytest.raises(TypeError, match="marker classes"):
            category("small")  # type: ignore[arg-type]

    def test_decorating_function_raises(self):
        def test_something():
            pass

        with pytest.raises(TypeError, match="can only decorate classes"):
            category(SmallTests)(test_something)  # type: ignore[type-var]


class TestSizeCategory:
    @pytest.mark.parametrize("size", [SmallTests, MediumTests, LargeTests])
    def test_each_size_is_recognized(self, size):
        @category(size)
        class SizedTest:
            pass

        assert size_category(SizedTest) is size

    def test_size_found_among_other_categories(self):
        @category(ClientTests, MiscTests, LargeTests)
        class MixedTest:
            pass

        assert size_category(MixedTest) is LargeTests

    def test_missing_category_names_the_class(self):
        class BazTest:
            pass

        with pytest.raises(MissingCategoryError, match=r"(?s)BazTest is not annotated.*Remediation"):
            size_category(BazTest)

    def test_unrecognized_category_names_the_class(self):
        @category(IntegrationTests)
        class QuxTest:
            pass

        with pytest.raises(UnrecognizedCategoryError) as exc_info:
            size_category(QuxTest)

        msg = str(exc_info.value)
        assert "QuxTest" in msg
        assert "SmallTests/MediumTests/LargeTests" in msg
        assert "IntegrationTests" in msg

    def test_empty_declaration_is_unrecognized(self):
        @category()
        class EmptyTest:
            pass

        with pytest.raises(UnrecognizedCategoryError, match="EmptyTest"):
            size_category(EmptyTest)

    def test_classification_errors_are_value_errors(self):
        assert issubclass(MissingCategoryError, ClassificationError)
        assert issubclass(UnrecognizedCategoryError, ClassificationError)
        assert issubclass(ClassificationError, ValueError)

    def test_first_size_wins_and_warns(self, loguru_messages):
        @category(MediumTests, SmallTests)
        class AmbiguousTest:
            pass

        assert size_category(AmbiguousTest) is MediumTests
        assert any("several size categories" in m for m in loguru_messages)


def test_qualified_name_includes_module():
    class LocalTest:
        pass

    name = qualified_name(LocalTest)
    assert name.startswith(__name__ + ".")
    assert name.endswith("LocalTest")


@pytest.mark.parametrize(
    "marker",
    [SmallTests, MediumTests, LargeTests, ClientTests, MiscTests, IntegrationTests],
)
def test_category_markers_are_documented(marker):
    assert marker.__doc__ and marker.__doc__.strip()
