"""Tests for sonar_objc/complexity"""

import logging

import pytest

from sonar_objc.api import (
    FileSystem,
    Project,
    ReportParseError,
    SensorContext,
    Settings,
)
from sonar_objc.complexity.lizard_measure_persistor import LizardMeasurePersistor
from sonar_objc.complexity.lizard_report_parser import LizardReportParser
from sonar_objc.complexity.lizard_sensor import (
    DEFAULT_REPORT_PATH,
    REPORT_PATH_KEY,
    LizardSensor,
)
from sonar_objc.models import CoreMetrics, Measure


def _values(measures: list[Measure]) -> dict:
    return {m.metric.key: m.value for m in measures}


# ---------------------------------------------------------------------------
# Report location
# ---------------------------------------------------------------------------

def test_report_key_uses_plugin_prefix():
    assert REPORT_PATH_KEY == "sonar.objectivec.lizard.report"


def test_default_report_path_under_base_dir(tmp_path):
    fs = FileSystem(tmp_path)
    sensor = LizardSensor(fs, Settings())
    assert sensor.report_file() == fs.base_dir / DEFAULT_REPORT_PATH


def test_configured_absolute_path_used_unmodified(tmp_path):
    report = tmp_path / "elsewhere" / "lizard.xml"
    sensor = LizardSensor(FileSystem(tmp_path / "project"), Settings({REPORT_PATH_KEY: str(report)}))
    assert sensor.report_file() == report


def test_configured_relative_path_resolved_against_base_dir(tmp_path):
    fs = FileSystem(tmp_path)
    sensor = LizardSensor(fs, Settings({REPORT_PATH_KEY: "build/lizard.xml"}))
    assert sensor.report_file() == fs.base_dir / "build" / "lizard.xml"


# ---------------------------------------------------------------------------
# LizardReportParser
# ---------------------------------------------------------------------------

def test_parse_keys_are_report_file_names(fixtures_dir):
    measures = LizardReportParser().parse_report(fixtures_dir / "lizard-report.xml")
    assert set(measures) == {"./Classes/AppDelegate.m", "./Classes/Parser.m", "./Classes/Parser.h"}


def test_parse_file_measures_match_report(fixtures_dir):
    measures = LizardReportParser().parse_report(fixtures_dir / "lizard-report.xml")
    values = _values(measures["./Classes/AppDelegate.m"])
    assert values["complexity"] == 4
    assert values["functions"] == 2
    assert values["file_complexity"] == 4.0
    assert values["file_complexity_distribution"] == "0=1;5=0;10=0;20=0;30=0;60=0;90=0"


def test_parse_function_measures_grouped_by_file(fixtures_dir):
    measures = LizardReportParser().parse_report(fixtures_dir / "lizard-report.xml")
    app = _values(measures["./Classes/AppDelegate.m"])
    assert app["complexity_in_functions"] == 4
    assert app["function_complexity"] == 2.0
    assert app["function_complexity_distribution"] == "1=1;2=1;4=0;6=0;8=0;10=0;12=0;20=0;30=0"

    parser = _values(measures["./Classes/Parser.m"])
    assert parser["complexity_in_functions"] == 9
    assert parser["function_complexity"] == 9.0


def test_parse_file_without_functions_has_no_function_measures(fixtures_dir):
    measures = LizardReportParser().parse_report(fixtures_dir / "lizard-report.xml")
    header = _values(measures["./Classes/Parser.h"])
    assert header["complexity"] == 0
    assert "function_complexity" not in header


def test_parse_measure_type_is_case_insensitive(tmp_path):
    report = tmp_path / "lizard.xml"
    report.write_text(
        '<cppncss><measure type="file"><item name="A.m">'
        "<value>1</value><value>3</value><value>7</value><value>0</value>"
        "</item></measure></cppncss>"
    )
    measures = LizardReportParser().parse_report(report)
    assert _values(measures["A.m"])["complexity"] == 7


def test_parse_malformed_report_raises(tmp_path):
    report = tmp_path / "lizard.xml"
    report.write_text("<cppncss><measure>")
    with pytest.raises(ReportParseError, match="lizard.xml"):
        LizardReportParser().parse_report(report)


def test_parse_missing_report_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        LizardReportParser().parse_report(tmp_path / "missing.xml")


# ---------------------------------------------------------------------------
# LizardMeasurePersistor
# ---------------------------------------------------------------------------

def test_persistor_saves_measures_for_known_files(project_dir):
    fs = FileSystem(project_dir)
    context = SensorContext()
    measures = {"./Classes/Parser.m": [Measure(CoreMetrics.COMPLEXITY, 9)]}

    LizardMeasurePersistor(Project("app"), context, fs).save_measures(measures)

    assert context.get_measure("Classes/Parser.m", "complexity").value == 9


def test_persistor_skips_unknown_files(project_dir):
    context = SensorContext()
    measures = {"./Classes/Gone.m": [Measure(CoreMetrics.COMPLEXITY, 1)]}

    LizardMeasurePersistor(Project("app"), context, FileSystem(project_dir)).save_measures(measures)

    assert context.measures == {}


def test_persistor_ignores_none(project_dir):
    context = SensorContext()
    LizardMeasurePersistor(Project("app"), context, FileSystem(project_dir)).save_measures(None)
    assert context.measures == {}


def test_persistor_logs_duplicate_and_continues(project_dir, caplog):
    context = SensorContext()
    measures = {"Classes/Parser.m": [
        Measure(CoreMetrics.COMPLEXITY, 9),
        Measure(CoreMetrics.COMPLEXITY, 10),
        Measure(CoreMetrics.FUNCTIONS, 1),
    ]}

    with caplog.at_level(logging.ERROR):
        LizardMeasurePersistor(Project("app"), context, FileSystem(project_dir)).save_measures(measures)

    assert context.get_measure("Classes/Parser.m", "complexity").value == 9
    assert context.get_measure("Classes/Parser.m", "functions").value == 1
    assert "Complexity" in caplog.text


# ---------------------------------------------------------------------------
# LizardSensor
# ---------------------------------------------------------------------------

def test_sensor_executes_only_on_objc_projects(tmp_path, project_dir):
    (tmp_path / "other").mkdir()
    (tmp_path / "other" / "main.py").write_text("print()\n")

    assert LizardSensor(FileSystem(project_dir), Settings()).should_execute_on_project(Project("a"))
    assert not LizardSensor(FileSystem(tmp_path / "other"), Settings()).should_execute_on_project(Project("b"))


def test_sensor_analyse_saves_report_measures(project_dir):
    context = SensorContext()
    LizardSensor(FileSystem(project_dir), Settings()).analyse(Project("app"), context)

    assert set(context.measures) == {"Classes/AppDelegate.m", "Classes/Parser.m", "Classes/Parser.h"}
    assert context.get_measure("Classes/AppDelegate.m", "functions").value == 2


def test_sensor_analyse_missing_report_propagates(tmp_path):
    (tmp_path / "Foo.m").write_text("")
    with pytest.raises(FileNotFoundError):
        LizardSensor(FileSystem(tmp_path), Settings()).analyse(Project("app"), SensorContext())
