from sonar_objc.complexity.lizard_report_parser import LizardReportParser
from sonar_objc.complexity.lizard_sensor import LizardSensor

__all__ = ["LizardReportParser", "LizardSensor"]
