"""Import OCLint violations from its PMD-style XML report.

    <pmd version="oclint-0.10">
      <file name="/src/Classes/Foo.m">
        <violation beginline="12" rule="long line" priority="3">Line with 120 characters</violation>
      </file>
    </pmd>
"""

import logging
import xml.etree.ElementTree as ET

from sonar_objc.api import ReportParseError
from sonar_objc.language import PROPERTY_PREFIX
from sonar_objc.violations.oclint.rule_repository import REPOSITORY_KEY
from sonar_objc.violations.sensor import Violation, ViolationSensor

logger = logging.getLogger(__name__)


class OCLintSensor(ViolationSensor):
    TOOL_NAME = "OCLint"
    REPORT_PATH_KEY = PROPERTY_PREFIX + ".oclint.report"
    DEFAULT_REPORT_PATH = "sonar-reports/oclint.xml"
    REPOSITORY_KEY = REPOSITORY_KEY

    def parse_report(self, report_file) -> list[Violation]:
        try:
            root = ET.parse(report_file).getroot()
        except ET.ParseError as exc:
            raise ReportParseError(f"Unable to parse OCLint report '{report_file}': {exc}") from exc

        violations = []
        for file_element in root.iter("file"):
            path = file_element.get("name")
            if not path:
                logger.debug("Skipping <file> element without a name in %s", report_file)
                continue
            for element in file_element.iter("violation"):
                violations.append(Violation(
                    path=path,
                    line=_line_number(element.get("beginline"), report_file),
                    rule_key=element.get("rule", ""),
                    message=(element.text or "").strip(),
                ))
        return violations


def _line_number(value: str | None, report_file) -> int | None:
    if not value:
        return None
    try:
        return int(value)
    except ValueError as exc:
        raise ReportParseError(
            f"Invalid beginline '{value}' in OCLint report '{report_file}'"
        ) from exc
