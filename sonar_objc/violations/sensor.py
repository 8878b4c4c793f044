"""Base sensor turning a violation report into issues."""

import logging
from abc import abstractmethod
from dataclasses import dataclass
from pathlib import Path

from sonar_objc.api import Sensor
from sonar_objc.language import ObjectiveC
from sonar_objc.models import Issue
from sonar_objc.report_path import resolve_report_path

logger = logging.getLogger(__name__)


@dataclass
class Violation:
    path: str
    line: int | None
    rule_key: str
    message: str


class ViolationSensor(Sensor):
    """Subclasses name the report settings and implement :meth:`parse_report`."""

    TOOL_NAME: str
    REPORT_PATH_KEY: str
    DEFAULT_REPORT_PATH: str
    REPOSITORY_KEY: str

    def __init__(self, file_system, settings, rule_finder) -> None:
        self.file_system = file_system
        self.settings = settings
        self.rule_finder = rule_finder

    def should_execute_on_project(self, project) -> bool:
        return ObjectiveC.KEY in self.file_system.languages()

    def report_file(self) -> Path:
        return resolve_report_path(self.settings, self.file_system,
                                   self.REPORT_PATH_KEY, self.DEFAULT_REPORT_PATH)

    def analyse(self, project, context) -> None:
        report_file = self.report_file()
        if not report_file.is_file():
            logger.warning("No %s report found at %s, skipping", self.TOOL_NAME, report_file)
            return

        logger.info("Processing %s report: %s", self.TOOL_NAME, report_file)
        saved = 0
        for violation in self.parse_report(report_file):
            if self._save_violation(violation, context):
                saved += 1
        logger.info("Saved %d %s issue(s)", saved, self.TOOL_NAME)

    @abstractmethod
    def parse_report(self, report_file: Path) -> list[Violation]:
        ...

    def _save_violation(self, violation: Violation, context) -> bool:
        input_file = self.file_system.input_file(violation.path)
        if input_file is None:
            logger.debug("Skipping violation on unknown file %s", violation.path)
            return False

        rule = self.rule_finder.find_by_key(self.REPOSITORY_KEY, violation.rule_key)
        if rule is None:
            logger.warning("Unknown %s rule '%s'", self.TOOL_NAME, violation.rule_key)
            return False

        context.add_issue(Issue(
            rule=rule,
            path=input_file.relative_path,
            line=violation.line,
            message=violation.message,
        ))
        return True
