"""Sensor importing complexity metrics from the Lizard XML report."""

import logging
from pathlib import Path

from sonar_objc.api import Sensor
from sonar_objc.complexity.lizard_measure_persistor import LizardMeasurePersistor
from sonar_objc.complexity.lizard_report_parser import LizardReportParser
from sonar_objc.language import PROPERTY_PREFIX, ObjectiveC
from sonar_objc.report_path import resolve_report_path

logger = logging.getLogger(__name__)

REPORT_PATH_KEY = PROPERTY_PREFIX + ".lizard.report"
DEFAULT_REPORT_PATH = "sonar-reports/lizard-report.xml"


class LizardSensor(Sensor):
    REPORT_PATH_KEY = REPORT_PATH_KEY
    DEFAULT_REPORT_PATH = DEFAULT_REPORT_PATH

    def __init__(self, file_system, settings) -> None:
        self.file_system = file_system
        self.settings = settings

    def should_execute_on_project(self, project) -> bool:
        """True when the project contains Objective-C sources."""
        return ObjectiveC.KEY in self.file_system.languages()

    def analyse(self, project, context) -> None:
        measures = self.parse_reports(LizardReportParser())
        logger.info("Saving results of complexity analysis")
        LizardMeasurePersistor(project, context, self.file_system).save_measures(measures)

    def parse_reports(self, parser: LizardReportParser) -> dict:
        report_file = self.report_file()
        logger.info("Processing complexity report: %s", report_file)
        return parser.parse_report(report_file)

    def report_file(self) -> Path:
        """The configured report path, or the default one under the base dir."""
        return resolve_report_path(self.settings, self.file_system,
                                   REPORT_PATH_KEY, DEFAULT_REPORT_PATH)
