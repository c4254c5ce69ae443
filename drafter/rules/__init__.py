"""Rule loading: release-drafter documents into validated RuleSets."""

from .errors import ConfigError, PatternError, RuleError
from .loader import load_rules, parse_rules, parse_rules_text
from .model import AutolabelRule, Category, RuleSet, Severity, Templates, highest_severity

__all__ = [
    "AutolabelRule",
    "Category",
    "ConfigError",
    "PatternError",
    "RuleError",
    "RuleSet",
    "Severity",
    "Templates",
    "highest_severity",
    "load_rules",
    "parse_rules",
    "parse_rules_text",
]
