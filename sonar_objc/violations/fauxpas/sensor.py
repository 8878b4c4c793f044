"""Import FauxPas diagnostics from ``fauxpas check --outputFormat json``."""

import json

from sonar_objc.api import ReportParseError
from sonar_objc.language import PROPERTY_PREFIX
from sonar_objc.violations.fauxpas.rule_repository import REPOSITORY_KEY
from sonar_objc.violations.sensor import Violation, ViolationSensor


class FauxPasSensor(ViolationSensor):
    TOOL_NAME = "FauxPas"
    REPORT_PATH_KEY = PROPERTY_PREFIX + ".fauxpas.report"
    DEFAULT_REPORT_PATH = "sonar-reports/fauxpas.json"
    REPOSITORY_KEY = REPOSITORY_KEY

    def parse_report(self, report_file) -> list[Violation]:
        with open(report_file, encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as exc:
                raise ReportParseError(
                    f"Unable to parse FauxPas report '{report_file}': {exc}"
                ) from exc

        if not isinstance(data, dict):
            raise ReportParseError(f"FauxPas report '{report_file}' is not a JSON object")
        diagnostics = data.get("diagnostics", [])
        if not isinstance(diagnostics, list):
            raise ReportParseError(f"'diagnostics' in FauxPas report '{report_file}' is not a list")

        violations = []
        for diagnostic in diagnostics:
            if not isinstance(diagnostic, dict):
                raise ReportParseError(
                    f"Unexpected diagnostic in FauxPas report '{report_file}': {diagnostic!r}"
                )
            # Project-level diagnostics carry no file
            if not diagnostic.get("file"):
                continue
            start = (diagnostic.get("extent") or {}).get("start") or {}
            violations.append(Violation(
                path=diagnostic["file"],
                line=start.get("line"),
                rule_key=diagnostic.get("ruleShortName", ""),
                message=diagnostic.get("info") or diagnostic.get("ruleName", ""),
            ))
        return violations
