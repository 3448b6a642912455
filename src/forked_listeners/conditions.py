"""Evaluation of a listener's if/unless activation conditions."""

from __future__ import annotations

from typing import Mapping

TRUE_TOKENS = frozenset({"true", "yes", "on"})
FALSE_TOKENS = frozenset({"false", "no", "off"})


class ConditionEvaluator:
    def if_condition_holds(self, condition: str | None) -> bool:
        raise NotImplementedError("ConditionEvaluator.if_condition_holds must be implemented by subclasses.")

    def unless_condition_holds(self, condition: str | None) -> bool:
        raise NotImplementedError("ConditionEvaluator.unless_condition_holds must be implemented by subclasses.")


class PropertyConditions(ConditionEvaluator):
    """
    Evaluates conditions against a set of build properties.
    A condition is either a boolean token or the name of a property that must be set.
    """

    def __init__(self, properties: Mapping[str, str] | None = None) -> None:
        self._properties: dict[str, str] = dict(properties or {})

    def if_condition_holds(self, condition: str | None) -> bool:
        if condition is None:
            return True
        return self._evaluate(condition)

    def unless_condition_holds(self, condition: str | None) -> bool:
        if condition is None:
            return False
        return self._evaluate(condition)

    def _evaluate(self, condition: str) -> bool:
        token = condition.lower()
        if token in TRUE_TOKENS:
            return True
        if token in FALSE_TOKENS:
            return False
        return condition in self._properties
