"""
String validation chains for inbound query fields.

Rules are stateless predicates composed into an immutable
:class:`StringChain`.  A :class:`ValidatorSet` bundles the three chains the
dispatcher needs and is built once at startup, then handed to the
dispatcher explicitly.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Iterable

from cloudquery.base.query import QUERY_ACTIONS, QUERY_RESOURCES, REQUEST_MAX_LEN

# Letters, digits and the separators used in zone names and dotted targets.
_ALPHA_NUM = re.compile(r"[A-Za-z0-9._-]+")


@dataclass(frozen=True)
class ValidationRule:
    """A named pass/fail check on a single string."""

    name: str
    check: Callable[[str], bool]

    def __call__(self, value: str) -> bool:
        return self.check(value)


def is_alpha_num() -> ValidationRule:
    return ValidationRule("alpha_num", lambda v: _ALPHA_NUM.fullmatch(v) is not None)


def is_max_len(limit: int) -> ValidationRule:
    return ValidationRule(f"max_len({limit})", lambda v: len(v) <= limit)


def is_in_list(allowed: Iterable[str]) -> ValidationRule:
    values = frozenset(allowed)
    return ValidationRule(f"in_list({sorted(values)})", lambda v: v in values)


class StringChain:
    """Immutable sequence of rules; a value is valid when every rule passes.

    Example::

        chain = StringChain().is_alpha_num().is_max_len(50)
        chain.validate("us-central1")   # True
    """

    __slots__ = ("_rules",)

    def __init__(self, rules: tuple[ValidationRule, ...] = ()) -> None:
        self._rules = rules

    @property
    def rules(self) -> tuple[ValidationRule, ...]:
        return self._rules

    def _extend(self, rule: ValidationRule) -> StringChain:
        return StringChain(self._rules + (rule,))

    def is_alpha_num(self) -> StringChain:
        return self._extend(is_alpha_num())

    def is_max_len(self, limit: int) -> StringChain:
        return self._extend(is_max_len(limit))

    def is_in_list(self, allowed: Iterable[str]) -> StringChain:
        return self._extend(is_in_list(allowed))

    def validate(self, value: str) -> bool:
        return all(rule(value) for rule in self._rules)

    def __repr__(self) -> str:
        return f"StringChain({', '.join(r.name for r in self._rules)})"


@dataclass(frozen=True)
class ValidatorSet:
    """The precomposed checks applied to every query.

    Attributes:
        check_len: Charset + maximum length, used for scope and target fields.
        check_resource: Charset + membership in the resource allow-list.
        check_action: Charset + membership in the action allow-list.
    """

    check_len: StringChain
    check_resource: StringChain
    check_action: StringChain

    @classmethod
    def default(
        cls,
        resources: Iterable[str] = QUERY_RESOURCES,
        actions: Iterable[str] = QUERY_ACTIONS,
        max_len: int = REQUEST_MAX_LEN,
    ) -> ValidatorSet:
        base = StringChain().is_alpha_num()
        return cls(
            check_len=base.is_max_len(max_len),
            check_resource=base.is_in_list(resources),
            check_action=base.is_in_list(actions),
        )


__all__ = [
    "ValidationRule",
    "StringChain",
    "ValidatorSet",
    "is_alpha_num",
    "is_max_len",
    "is_in_list",
]
