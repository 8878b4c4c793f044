"""Data models shared by sensors, rule repositories and profiles.

Contains dataclasses used to structure and serialize the JSON output:
    - Metric / Measure         (complexity measures per file)
    - Rule / ActiveRule        (rule repositories and profiles)
    - RulesProfile
    - Issue                    (violations imported from OCLint / FauxPas)
"""

from dataclasses import dataclass, field
from typing import Any

SEVERITIES = ("INFO", "MINOR", "MAJOR", "CRITICAL", "BLOCKER")


# ---------------------------------------------------------------------------
# Measures
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Metric:
    key: str
    name: str
    value_type: str = "INT"


class CoreMetrics:
    """Platform metrics populated from the Lizard report."""

    COMPLEXITY = Metric("complexity", "Complexity")
    FUNCTIONS = Metric("functions", "Functions")
    FILE_COMPLEXITY = Metric("file_complexity", "Complexity /file", "FLOAT")
    COMPLEXITY_IN_FUNCTIONS = Metric("complexity_in_functions", "Complexity in functions")
    FUNCTION_COMPLEXITY = Metric("function_complexity", "Complexity /function", "FLOAT")
    FILE_COMPLEXITY_DISTRIBUTION = Metric(
        "file_complexity_distribution", "File distribution /complexity", "DISTRIB")
    FUNCTION_COMPLEXITY_DISTRIBUTION = Metric(
        "function_complexity_distribution", "Function distribution /complexity", "DISTRIB")


@dataclass
class Measure:
    metric: Metric
    value: Any

    def to_dict(self) -> dict:
        return {"metric": self.metric.key, "value": self.value}


class RangeDistribution:
    """Count values into buckets identified by their bottom limit.

    Serialized the way the platform stores distributions:
    ``"1=0;2=3;4=1"`` (bottom limit = number of values in the bucket).
    """

    def __init__(self, bottom_limits) -> None:
        self.bottom_limits = list(bottom_limits)
        self.counts = {limit: 0 for limit in self.bottom_limits}

    def add(self, value) -> "RangeDistribution":
        bucket = None
        for limit in self.bottom_limits:
            if value >= limit:
                bucket = limit
        # Values under the first limit are not counted
        if bucket is not None:
            self.counts[bucket] += 1
        return self

    def __str__(self) -> str:
        return ";".join(f"{limit}={self.counts[limit]}" for limit in self.bottom_limits)


# ---------------------------------------------------------------------------
# Rules & profiles
# ---------------------------------------------------------------------------

@dataclass
class Rule:
    repository_key: str
    key: str
    name: str
    description: str = ""
    severity: str = "MAJOR"
    category: str | None = None

    def to_dict(self) -> dict:
        return {
            "repository": self.repository_key,
            "key": self.key,
            "name": self.name,
            "description": self.description,
            "severity": self.severity,
            "category": self.category,
        }


@dataclass
class ActiveRule:
    rule: Rule
    severity: str

    def to_dict(self) -> dict:
        return {
            "repository": self.rule.repository_key,
            "key": self.rule.key,
            "severity": self.severity,
        }


@dataclass
class RulesProfile:
    name: str | None = None
    language: str | None = None
    active_rules: list[ActiveRule] = field(default_factory=list)

    def activate_rule(self, rule: Rule, severity: str | None = None) -> ActiveRule:
        active = ActiveRule(rule=rule, severity=severity or rule.severity)
        self.active_rules.append(active)
        return active

    def get_active_rule(self, repository_key: str, rule_key: str) -> ActiveRule | None:
        for active in self.active_rules:
            if active.rule.repository_key == repository_key and active.rule.key == rule_key:
                return active
        return None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "language": self.language,
            "rules": [a.to_dict() for a in self.active_rules],
        }


# ---------------------------------------------------------------------------
# Issues
# ---------------------------------------------------------------------------

@dataclass
class Issue:
    rule: Rule
    path: str
    line: int | None
    message: str
    severity: str | None = None

    def to_dict(self) -> dict:
        return {
            "rule": f"{self.rule.repository_key}:{self.rule.key}",
            "severity": self.severity or self.rule.severity,
            "component": self.path,
            "line": self.line,
            "message": self.message,
        }
