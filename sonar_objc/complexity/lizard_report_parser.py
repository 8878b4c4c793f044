"""Parse the XML report produced by ``lizard --xml``.

The report follows the cppncss layout::

    <cppncss>
      <measure type="Function">
        <labels><label>Nr.</label><label>NCSS</label><label>CCN</label></labels>
        <item name="-[Foo bar] at ./Classes/Foo.m:12">
          <value>1</value><value>4</value><value>2</value>
        </item>
      </measure>
      <measure type="File">
        <labels>...<label>Functions</label></labels>
        <item name="./Classes/Foo.m">
          <value>1</value><value>30</value><value>8</value><value>4</value>
        </item>
      </measure>
    </cppncss>
"""

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass

from sonar_objc.api import ReportParseError
from sonar_objc.models import CoreMetrics, Measure, RangeDistribution

logger = logging.getLogger(__name__)

MEASURE = "measure"
MEASURE_TYPE = "type"
MEASURE_ITEM = "item"
FILE_MEASURE = "file"
FUNCTION_MEASURE = "function"
NAME = "name"
VALUE = "value"

CYCLOMATIC_COMPLEXITY_INDEX = 2
FUNCTIONS_INDEX = 3

FUNCTIONS_DISTRIB_BOTTOM_LIMITS = (1, 2, 4, 6, 8, 10, 12, 20, 30)
FILES_DISTRIB_BOTTOM_LIMITS = (0, 5, 10, 20, 30, 60, 90)


@dataclass
class ObjCFunction:
    name: str
    cyclomatic_complexity: int


class LizardReportParser:

    def parse_report(self, report_file) -> dict[str, list[Measure]]:
        """Return ``{file name: [measures]}`` for every file in *report_file*.

        Raises:
            FileNotFoundError: the report does not exist
            ReportParseError:  the report is not well-formed XML
        """
        with open(report_file, "rb") as f:
            try:
                root = ET.parse(f).getroot()
            except ET.ParseError as exc:
                raise ReportParseError(
                    f"Unable to parse Lizard report '{report_file}': {exc}"
                ) from exc
        return self.parse_document(root)

    def parse_document(self, root: ET.Element) -> dict[str, list[Measure]]:
        report_measures: dict[str, list[Measure]] = {}
        functions: list[ObjCFunction] = []

        for measure in root.iter(MEASURE):
            measure_type = measure.get(MEASURE_TYPE, "").lower()
            if measure_type == FILE_MEASURE:
                for item in measure.iter(MEASURE_ITEM):
                    self._add_complexity_file_measures(item, report_measures)
            elif measure_type == FUNCTION_MEASURE:
                for item in measure.iter(MEASURE_ITEM):
                    functions.append(self._parse_function(item))

        self._add_complexity_function_measures(report_measures, functions)
        logger.debug("Parsed complexity measures for %d file(s)", len(report_measures))
        return report_measures

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    @staticmethod
    def _values(item: ET.Element) -> list[str]:
        return [(v.text or "").strip() for v in item.findall(VALUE)]

    def _add_complexity_file_measures(self, item: ET.Element, report_measures: dict) -> None:
        file_name = item.get(NAME)
        values = self._values(item)
        complexity = int(values[CYCLOMATIC_COMPLEXITY_INDEX])
        number_of_functions = int(values[FUNCTIONS_INDEX])

        distribution = RangeDistribution(FILES_DISTRIB_BOTTOM_LIMITS).add(complexity)
        report_measures[file_name] = [
            Measure(CoreMetrics.COMPLEXITY, complexity),
            Measure(CoreMetrics.FUNCTIONS, number_of_functions),
            Measure(CoreMetrics.FILE_COMPLEXITY, float(complexity)),
            Measure(CoreMetrics.FILE_COMPLEXITY_DISTRIBUTION, str(distribution)),
        ]

    def _parse_function(self, item: ET.Element) -> ObjCFunction:
        values = self._values(item)
        return ObjCFunction(
            name=item.get(NAME, ""),
            cyclomatic_complexity=int(values[CYCLOMATIC_COMPLEXITY_INDEX]),
        )

    def _add_complexity_function_measures(self, report_measures: dict,
                                          functions: list[ObjCFunction]) -> None:
        for file_name, measures in report_measures.items():
            # Lizard names functions "<signature> at <file>:<line>"
            in_file = [f for f in functions if file_name in f.name]
            if not in_file:
                continue

            complexity_in_functions = sum(f.cyclomatic_complexity for f in in_file)
            distribution = RangeDistribution(FUNCTIONS_DISTRIB_BOTTOM_LIMITS)
            for func in in_file:
                distribution.add(func.cyclomatic_complexity)

            measures.extend([
                Measure(CoreMetrics.COMPLEXITY_IN_FUNCTIONS, complexity_in_functions),
                Measure(CoreMetrics.FUNCTION_COMPLEXITY, complexity_in_functions / len(in_file)),
                Measure(CoreMetrics.FUNCTION_COMPLEXITY_DISTRIBUTION, str(distribution)),
            ])
