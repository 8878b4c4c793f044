"""OCLint rule repository, loaded from the bundled ``oclint/rules.txt``.

The file follows the layout of ``oclint -rule-help``::

    long line
    ----------

    Summary: Name: long line

    Severity: 3
    Category: OCLint
"""

import logging

from sonar_objc import resources
from sonar_objc.api import RuleRepository
from sonar_objc.language import ObjectiveC
from sonar_objc.models import SEVERITIES, Rule

logger = logging.getLogger(__name__)

REPOSITORY_KEY = "OCLint"
REPOSITORY_NAME = "OCLint"
RULES_FILE = "oclint/rules.txt"

_UNDERLINE = "----------"
_SUMMARY = "Summary: "
_SEVERITY = "Severity: "
_CATEGORY = "Category: "


def severity_of(level: int) -> str:
    """Map OCLint's 0..4 priority scale onto the platform severities."""
    if 0 <= level < len(SEVERITIES):
        return SEVERITIES[level]
    logger.warning("Unknown OCLint severity %d, using MAJOR", level)
    return "MAJOR"


def parse_rules(text: str, repository_key: str = REPOSITORY_KEY) -> list[Rule]:
    rules: list[Rule] = []
    previous = ""
    rule: Rule | None = None

    for raw_line in text.splitlines():
        line = raw_line.strip()
        if line == _UNDERLINE and previous:
            rule = Rule(repository_key=repository_key, key=previous, name=previous)
            rules.append(rule)
        elif rule is not None and line.startswith(_SUMMARY):
            summary = line[len(_SUMMARY):]
            rule.description = summary
            if summary.startswith("Name: "):
                rule.name = summary[len("Name: "):]
        elif rule is not None and line.startswith(_SEVERITY):
            rule.severity = severity_of(int(line[len(_SEVERITY):]))
        elif rule is not None and line.startswith(_CATEGORY):
            rule.category = line[len(_CATEGORY):]
        if line:
            previous = line

    return rules


class OCLintRuleRepository(RuleRepository):
    REPOSITORY_KEY = REPOSITORY_KEY

    key = REPOSITORY_KEY
    language = ObjectiveC.KEY
    name = REPOSITORY_NAME

    def create_rules(self) -> list[Rule]:
        rules = parse_rules(resources.read_text(RULES_FILE))
        logger.debug("Loaded %d OCLint rule(s)", len(rules))
        return rules
