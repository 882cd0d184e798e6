"""Test classification categories and their registry.

Categories are plain marker classes. A test class declares its categories
with the ``category`` decorator when the class is defined; the declaration
is stored in a registry keyed by class, so no annotation reflection is
needed at lookup time.

Usage
-----
```python
from size_timeouts.categories import ClientTests, SmallTests, category


@category(SmallTests, ClientTests)
class TestConnectionPool:
    def test_borrow(self): ...
```

Only ``SmallTests``, ``MediumTests`` and ``LargeTests`` carry a timeout.
The remaining categories describe what a class tests, not how long it runs.
"""

from __future__ import annotations

import weakref
from collections.abc import Callable
from typing import TypeVar

from loguru import logger

from size_timeouts.common.errors import (
    MissingCategoryError,
    UnrecognizedCategoryError,
    raise_fatal_with_remedy,
)

T = TypeVar("T", bound=type)


class SmallTests:
    """Tests expected to finish within seconds, without external services."""


class MediumTests:
    """Tests that may start in-process services or touch the filesystem."""


class LargeTests:
    """Tests that spin up clusters or run long end-to-end scenarios."""


class ClientTests:
    """Tests exercising the client API against in-process services."""


class MiscTests:
    """Tests that fit no other functional category."""


class IntegrationTests:
    """Tests run against a deployed system rather than the test process."""


SIZE_CATEGORIES: tuple[type, ...] = (SmallTests, MediumTests, LargeTests)

# Marker names used for ``-m`` selection of resolved classes.
SIZE_MARKERS: dict[type, str] = {
    SmallTests: "small",
    MediumTests: "medium",
    LargeTests: "large",
}

_CATEGORY_REGISTRY: weakref.WeakKeyDictionary[type, tuple[type, ...]] = (
    weakref.WeakKeyDictionary()
)


def qualified_name(cls: type) -> str:
    """Return ``module.QualName`` for a class, the name used in every message."""
    return f"{cls.__module__}.{cls.__qualname__}"


def category(*categories: type) -> Callable[[T], T]:
    """Class decorator declaring the categories of a test class.

    Parameters
    ----------
    *categories : type
        Category marker classes, in declaration order.

    Raises
    ------
    TypeError
        If a category is not a class, or the decorated object is not a class.
    ValueError
        If the decorated class already declared its own categories.
    """
    for cat in categories:
        if not isinstance(cat, type):
            msg = f"Categories must be marker classes, got {cat!r}"
            raise TypeError(msg)

    def decorate(cls: T) -> T:
        if not isinstance(cls, type):
            msg = f"@category can only decorate classes, got {cls!r}"
            raise TypeError(msg)
        if cls in _CATEGORY_REGISTRY:
            msg = f"{qualified_name(cls)} already declares categories"
            raise ValueError(msg)
        _CATEGORY_REGISTRY[cls] = tuple(categories)
        logger.debug(
            "Registered categories {} for {}",
            [c.__name__ for c in categories],
            qualified_name(cls),
        )
        return cls

    return decorate


def declared_categories(cls: type) -> tuple[type, ...] | None:
    """Return the categories declared by ``cls`` or its nearest declaring base.

    Returns None when no class in the MRO declared categories. An empty
    tuple means ``@category()`` was applied without arguments.
    """
    for klass in cls.__mro__:
        declared = _CATEGORY_REGISTRY.get(klass)
        if declared is not None:
            return declared
    return None


def size_category(cls: type) -> type:
    """Return the size category of a test class.

    The first size category in declaration order wins.

    Raises
    ------
    MissingCategoryError
        If the class declares no categories.
    UnrecognizedCategoryError
        If none of the declared categories is SmallTests/MediumTests/LargeTests.
    """
    declared = declared_categories(cls)
    if declared is None:
        raise_fatal_with_remedy(
            f"{qualified_name(cls)} is not annotated with a @category",
            "Decorate the class with @category(SmallTests), @category(MediumTests) "
            "or @category(LargeTests).",
            MissingCategoryError,
        )
    sizes = [c for c in declared if c in SIZE_CATEGORIES]
    if not sizes:
        raise_fatal_with_remedy(
            f"{qualified_name(cls)} does not have SmallTests/MediumTests/LargeTests "
            f"in its @category (declared: {[c.__name__ for c in declared]})",
            "Add exactly one of SmallTests, MediumTests or LargeTests to the @category.",
            UnrecognizedCategoryError,
        )
    if len(sizes) > 1:
        logger.warning(
            "{} declares several size categories {}; using {}",
            qualified_name(cls),
            [c.__name__ for c in sizes],
            sizes[0].__name__,
        )
    return sizes[0]
