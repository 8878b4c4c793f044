import json
import logging

from sonar_objc import resources
from sonar_objc.api import RuleRepository
from sonar_objc.language import ObjectiveC
from sonar_objc.models import Rule

logger = logging.getLogger(__name__)

REPOSITORY_KEY = "FauxPas"
REPOSITORY_NAME = "FauxPas"
RULES_FILE = "fauxpas/rules.json"


class FauxPasRuleRepository(RuleRepository):
    """FauxPas rules, read from the bundled JSON rule list."""

    REPOSITORY_KEY = REPOSITORY_KEY

    key = REPOSITORY_KEY
    language = ObjectiveC.KEY
    name = REPOSITORY_NAME

    def create_rules(self) -> list[Rule]:
        rules = [
            Rule(
                repository_key=REPOSITORY_KEY,
                key=raw["key"],
                name=raw.get("name", raw["key"]),
                description=raw.get("description", ""),
                severity=raw.get("severity", "MAJOR"),
                category=raw.get("category"),
            )
            for raw in json.loads(resources.read_text(RULES_FILE))
        ]
        logger.debug("Loaded %d FauxPas rule(s)", len(rules))
        return rules
