"""
Contains functionality to analyze the result of a validation process
"""
from typing import TYPE_CHECKING, Any, Optional

from frozendict import frozendict

from .core import format_path

if TYPE_CHECKING:
    from .validation import Rule


class ValidationResult:
    """
    The function `PathTreeView.check` will return an instance of this class. Besides the plain outcome it tells which
    rule decided it and which values the checked rules resolved to. The reason message is calculated only if you use it.
    """

    def __init__(
        self,
        valid: bool,
        checked_rules: list["Rule"],
        values: dict[str, Any],
        failed_rule: Optional["Rule"] = None,
        failed_predicate: Optional[int] = None,
        short_circuited_by: Optional["Rule"] = None,
    ):
        self.valid = valid
        self.checked_rules: tuple["Rule", ...] = tuple(checked_rules)
        self.values: frozendict[str, Any] = frozendict(values)
        self.failed_rule = failed_rule
        self.failed_predicate = failed_predicate
        self.short_circuited_by = short_circuited_by

        self._reason: Optional[str] = None

    def __bool__(self):
        return self.valid

    def __repr__(self):
        return f"ValidationResult(valid={self.valid}, checked={self.num_checked}, reason={self.reason!r})"

    @property
    def num_checked(self) -> int:
        """Number of rules which were evaluated before the validation came to a decision"""
        return len(self.checked_rules)

    @property
    def short_circuited(self) -> bool:
        """True if an optional but absent path accepted the tree before all rules were evaluated"""
        return self.short_circuited_by is not None

    @property
    def failed_path(self) -> Optional[str]:
        """The dotted path of the rule which failed the validation"""
        if self.failed_rule is None:
            return None
        return format_path(self.failed_rule.path)

    @property
    def reason(self) -> str:
        """A human readable explanation of the outcome"""
        if self._reason is None:
            if self.failed_rule is not None:
                if self.failed_predicate is None:
                    self._reason = f"{self.failed_path}: required but absent"
                else:
                    self._reason = f"{self.failed_path}: rule #{self.failed_predicate} not satisfied"
            elif self.short_circuit_by_path is not None:
                self._reason = f"{self.short_circuit_by_path}: optional and absent, remaining rules skipped"
            else:
                self._reason = "all rules satisfied"
        return self._reason

    @property
    def short_circuit_by_path(self) -> Optional[str]:
        """The dotted path of the optional rule which ended the validation early"""
        if self.short_circuited_by is None:
            return None
        return format_path(self.short_circuited_by.path)
