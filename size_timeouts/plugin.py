"""pytest plugin applying size-based timeouts to classified test classes.

Enable it from a conftest::

    pytest_plugins = ["size_timeouts.plugin"]

Every collected test method of a class that declares a size category (or
carries a ``CLASS_RULE``) gets a pytest-timeout ``timeout`` marker and the
matching ``small``/``medium``/``large`` marker. Misclassified classes are
reported when each of their tests is set up, so they error while the rest
of the session runs normally. Explicit ``timeout`` marks on a test, its
class or its module take precedence over the size timeout.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from loguru import logger

from size_timeouts.categories import SIZE_MARKERS, declared_categories, qualified_name
from size_timeouts.checker import check_class_rule, find_class_rule
from size_timeouts.common.errors import ClassificationError, ClassRuleError
from size_timeouts.common.logging import configure_logging
from size_timeouts.enforcer import PytestTimeoutEnforcer
from size_timeouts.policy import TimeoutPolicy
from size_timeouts.reporting import format_summary, generate_misclassified, generate_records
from size_timeouts.rule import ClassTestRule

if TYPE_CHECKING:
    from size_timeouts.enforcer import TimeoutEnforcer

PLUGIN_NAME = "size-timeouts-session"


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("size-timeouts", "size-classified test timeouts")
    group.addoption(
        "--size-timeouts-debug",
        action="store_true",
        default=False,
        help="Log class classification and resolved timeouts at DEBUG level.",
    )
    parser.addini(
        "size_timeouts_require_category",
        type="bool",
        default=False,
        help="Fail test classes that declare no size category.",
    )
    parser.addini(
        "size_timeouts_require_class_rule",
        type="bool",
        default=False,
        help="Fail test classes that do not carry their own CLASS_RULE.",
    )
    parser.addini(
        "size_timeouts_summary",
        type="bool",
        default=False,
        help="Always print the size timeout summary, not only on misclassification.",
    )


def pytest_configure(config: pytest.Config) -> None:
    for size, name in SIZE_MARKERS.items():
        config.addinivalue_line("markers", f"{name}: test class classified as {size.__name__}")
    if config.getoption("size_timeouts_debug"):
        configure_logging(verbose=True)
    plugin = SizeTimeoutPlugin(
        policy=TimeoutPolicy.from_env(),
        require_category=config.getini("size_timeouts_require_category"),
        require_class_rule=config.getini("size_timeouts_require_class_rule"),
        always_summarize=config.getini("size_timeouts_summary"),
    )
    config.pluginmanager.register(plugin, PLUGIN_NAME)


class SizeTimeoutPlugin:
    """Session state: one rule, or one error, per collected test class."""

    def __init__(
        self,
        policy: TimeoutPolicy,
        *,
        enforcer: TimeoutEnforcer | None = None,
        require_category: bool = False,
        require_class_rule: bool = False,
        always_summarize: bool = False,
    ) -> None:
        self.policy = policy
        self.enforcer = enforcer if enforcer is not None else PytestTimeoutEnforcer()
        self.require_category = require_category
        self.require_class_rule = require_class_rule
        self.always_summarize = always_summarize
        self.rules: dict[type, ClassTestRule | None] = {}
        self.errors: dict[type, Exception] = {}

    def rule_for(self, cls: type) -> ClassTestRule | None:
        """Return the cached rule of ``cls``; None for unclassified classes.

        Raises:
            ClassificationError: If the class is misclassified.
            ClassRuleError: If its CLASS_RULE is missing or foreign.
        """
        if cls in self.errors:
            raise self.errors[cls]
        if cls in self.rules:
            return self.rules[cls]
        try:
            rule = self._resolve(cls)
        except (ClassificationError, ClassRuleError) as exc:
            self.errors[cls] = exc
            raise
        self.rules[cls] = rule
        return rule

    def _resolve(self, cls: type) -> ClassTestRule | None:
        if self.require_class_rule:
            return check_class_rule(cls)
        if find_class_rule(cls) is not None:
            return check_class_rule(cls)
        if declared_categories(cls) is None and not self.require_category:
            logger.debug("{} is unclassified, no size timeout applied", qualified_name(cls))
            return None
        return ClassTestRule.for_class(cls, policy=self.policy, enforcer=self.enforcer)

    @pytest.hookimpl(tryfirst=True)
    def pytest_collection_modifyitems(self, items: list[pytest.Item]) -> None:
        # Runs before "-m" deselection so the size markers can be selected on.
        for item in items:
            cls = getattr(item, "cls", None)
            if cls is None:
                continue
            try:
                rule = self.rule_for(cls)
            except (ClassificationError, ClassRuleError):
                continue
            if rule is None:
                continue
            # Explicit timeout marks on the function, class or module win.
            if item.get_closest_marker("timeout") is None:
                rule.apply(item)
            item.add_marker(SIZE_MARKERS[rule.size])

    @pytest.hookimpl(tryfirst=True)
    def pytest_runtest_setup(self, item: pytest.Item) -> None:
        cls = getattr(item, "cls", None)
        if cls is not None and cls in self.errors:
            raise self.errors[cls]

    def pytest_terminal_summary(self, terminalreporter) -> None:  # type: ignore[no-untyped-def]
        if not self.errors and not self.always_summarize:
            return
        rules = [r for r in self.rules.values() if r is not None]
        terminalreporter.write_line(
            "\n"
            + format_summary(
                generate_records(rules),
                generate_misclassified(self.errors),
                self.policy,
            ),
        )
