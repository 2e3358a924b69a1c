"""
Contains the declarative rules a tree can be validated against.
The validation runs in two phases: first all wildcard rules get expanded into one rule per leaf path, then the
resulting flat rule list is evaluated in order.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, Mapping

from .analysis import ValidationResult
from .core import MISSING, format_path, resolve
from .errors import ConfigurationError
from .types import PathT, Predicate

logger = logging.getLogger(__name__)

WILDCARD = "*"
_RULE_FIELDS = frozenset({"path", "optional", "rules"})


class AbsentPolicy(str, Enum):
    """
    Decides what an optional rule whose path is absent means for the validation.
    """

    SHORT_CIRCUIT = "short_circuit"
    """The whole tree is accepted immediately, remaining rules are not evaluated"""
    SKIP = "skip"
    """Only this rule is skipped"""


@dataclass(frozen=True)
class Rule:
    """
    A single validation rule. `rules` are predicates which all have to hold for the value at `path`.
    A `path` of "*" applies `optional` and `rules` to every leaf path of the tree.
    """

    path: PathT
    optional: bool = False
    rules: tuple[Predicate, ...] = ()

    def __post_init__(self):
        if self.path is None or (isinstance(self.path, str) and not self.path):
            raise ConfigurationError("Invalid path in validation rule")
        if isinstance(self.path, list):
            object.__setattr__(self, "path", tuple(self.path))
        predicates = tuple(self.rules or ())
        for predicate in predicates:
            if not callable(predicate):
                raise ConfigurationError(f"{format_path(self.path)}: rules must be callable, got {predicate!r}")
        object.__setattr__(self, "rules", predicates)

    @property
    def is_wildcard(self) -> bool:
        return self.path == WILDCARD

    @classmethod
    def from_definition(cls, definition: "Rule | Mapping[str, Any]") -> "Rule":
        """
        Accepts an existing rule or a mapping with the keys "path", "optional" and "rules".
        """
        if isinstance(definition, Rule):
            return definition
        if not isinstance(definition, Mapping):
            raise ConfigurationError(f"Rule or mapping expected, received: {type(definition).__name__}")
        unknown_fields = set(definition) - _RULE_FIELDS
        if unknown_fields:
            raise ConfigurationError(f"Unknown rule field(s) {sorted(unknown_fields)}")
        return cls(
            path=definition.get("path"),
            optional=bool(definition.get("optional", False)),
            rules=definition.get("rules") or (),
        )


def expand_rules(rules: Iterable["Rule | Mapping[str, Any]"], keys: Callable[[], list[str]]) -> list[Rule]:
    """
    Normalizes all rules and replaces every wildcard rule by one rule per leaf path returned by `keys`.
    Concrete rules keep their order, the expanded rules are appended after them in the order of their wildcards.
    """
    normalized = [Rule.from_definition(definition) for definition in rules]
    expanded = [rule for rule in normalized if not rule.is_wildcard]
    leaf_keys: list[str] | None = None
    for rule in normalized:
        if not rule.is_wildcard:
            continue
        if leaf_keys is None:
            leaf_keys = keys()
        logger.debug("Expanding wildcard rule into %d leaf path(s)", len(leaf_keys))
        expanded.extend(Rule(path=key, optional=rule.optional, rules=rule.rules) for key in leaf_keys)
    return expanded


def run_rules(root: Any, rules: list[Rule], absent: AbsentPolicy = AbsentPolicy.SHORT_CIRCUIT) -> ValidationResult:
    """
    Evaluates an already expanded rule list against `root`. The first failing rule decides the result.
    """
    checked: list[Rule] = []
    values: dict[str, Any] = {}
    for rule in rules:
        checked.append(rule)
        value = resolve(root, rule.path)
        if value is MISSING:
            if not rule.optional:
                logger.debug("Validation failed: required path '%s' is absent", format_path(rule.path))
                return ValidationResult(False, checked, values, failed_rule=rule)
            if absent is AbsentPolicy.SHORT_CIRCUIT:
                logger.debug("Optional path '%s' is absent, accepting without further checks", format_path(rule.path))
                return ValidationResult(True, checked, values, short_circuited_by=rule)
            continue
        values[format_path(rule.path)] = value
        for index, predicate in enumerate(rule.rules):
            if not predicate(value):
                logger.debug("Validation failed: rule #%d of path '%s'", index, format_path(rule.path))
                return ValidationResult(False, checked, values, failed_rule=rule, failed_predicate=index)
    return ValidationResult(True, checked, values)
