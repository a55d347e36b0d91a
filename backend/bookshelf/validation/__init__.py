"""Input sanitizing and validation for inbound requests."""
from .rules import Field, Rule, RuleSet, ValidationResult, Violation
from .rulesets import BOOK_BODY, BOOK_ID, LOGIN, REGISTER

__all__ = [
    "BOOK_BODY",
    "BOOK_ID",
    "Field",
    "LOGIN",
    "REGISTER",
    "Rule",
    "RuleSet",
    "ValidationResult",
    "Violation",
]
