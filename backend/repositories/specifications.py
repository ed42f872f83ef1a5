"""
Specification Pattern Implementation

A rule written once as a Specification can be evaluated against a loaded
row (``is_satisfied_by``) or pushed into a query as a WHERE clause
(``to_sql_filter``). Rules combine with ``&`` and negate with ``~``.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar
from sqlalchemy import and_, not_


T = TypeVar('T')


class Specification(ABC, Generic[T]):
    """A single rule over rows of one model."""

    @abstractmethod
    def is_satisfied_by(self, candidate: T) -> bool:
        """
        Evaluate the rule against an in-memory object.

        Args:
            candidate: Model instance (or any object exposing the same attributes)

        Returns:
            True if the rule holds
        """

    @abstractmethod
    def to_sql_filter(self):
        """SQLAlchemy boolean expression equivalent to is_satisfied_by"""

    def __and__(self, other: "Specification[T]") -> "AllOf[T]":
        return AllOf(self, other)

    def __invert__(self) -> "Negation[T]":
        return Negation(self)


class AllOf(Specification[T]):
    """Conjunction of two rules."""

    def __init__(self, first: Specification[T], second: Specification[T]):
        self.rules = (first, second)

    def is_satisfied_by(self, candidate: T) -> bool:
        return all(rule.is_satisfied_by(candidate) for rule in self.rules)

    def to_sql_filter(self):
        return and_(*(rule.to_sql_filter() for rule in self.rules))


class Negation(Specification[T]):
    def __init__(self, rule: Specification[T]):
        self.rule = rule

    def is_satisfied_by(self, candidate: T) -> bool:
        return not self.rule.is_satisfied_by(candidate)

    def to_sql_filter(self):
        return not_(self.rule.to_sql_filter())
