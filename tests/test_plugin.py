"""Tests for sonar_objc/plugin.py and the in-process runtime"""

import pytest

from sonar_objc.api import (
    DuplicateMeasureError,
    FileSystem,
    SensorContext,
    Settings,
)
from sonar_objc.models import CoreMetrics, Measure, RangeDistribution
from sonar_objc.plugin import ObjectiveCPlugin, UnknownRepositoryError


def test_run_analysis_collects_measures_and_issues(project_dir):
    context = ObjectiveCPlugin().run_analysis(FileSystem(project_dir), Settings())

    assert context.get_measure("Classes/Parser.m", "complexity").value == 9
    repositories = {i.rule.repository_key for i in context.issues}
    assert repositories == {"OCLint", "FauxPas"}


def test_run_analysis_skips_non_objc_project(tmp_path):
    (tmp_path / "app.py").write_text("")
    # No report exists: sensors must not even try to read one
    context = ObjectiveCPlugin().run_analysis(FileSystem(tmp_path), Settings())
    assert context.measures == {}
    assert context.issues == []


def test_create_profiles_returns_both_bundled_profiles():
    profiles = ObjectiveCPlugin().create_profiles()
    assert sorted(p.name for p, _ in profiles) == ["FauxPas", "OCLint"]
    assert all(not m.has_errors() for _, m in profiles)


def test_create_profile_unknown_repository():
    with pytest.raises(UnknownRepositoryError, match="PMD"):
        ObjectiveCPlugin().create_profile("PMD")


def test_rule_repository_lookup_is_case_insensitive():
    assert ObjectiveCPlugin().rule_repository("oclint").key == "OCLint"


# ---------------------------------------------------------------------------
# Runtime
# ---------------------------------------------------------------------------

def test_file_system_detects_languages(project_dir):
    fs = FileSystem(project_dir)
    assert fs.languages() == {"objc"}
    assert fs.input_file("README.md").language is None
    assert fs.input_file(project_dir / "Classes" / "Parser.h").relative_path == "Classes/Parser.h"
    assert fs.input_file("Classes/Missing.m") is None


def test_file_system_finds_symlinked_source(project_dir, tmp_path_factory):
    shared = tmp_path_factory.mktemp("shared") / "Shared.m"
    shared.write_text("@implementation Shared\n@end\n")
    (project_dir / "Classes" / "Shared.m").symlink_to(shared)

    fs = FileSystem(project_dir)

    input_file = fs.input_file("Classes/Shared.m")
    assert input_file is not None
    assert input_file.relative_path == "Classes/Shared.m"
    assert input_file.language == "objc"
    assert fs.input_file(project_dir / "Classes" / "Shared.m") == input_file


def test_lizard_measures_saved_on_symlinked_source(project_dir, tmp_path_factory):
    real = tmp_path_factory.mktemp("real") / "Parser.m"
    (project_dir / "Classes" / "Parser.m").rename(real)
    (project_dir / "Classes" / "Parser.m").symlink_to(real)

    context = ObjectiveCPlugin().run_analysis(FileSystem(project_dir), Settings())

    assert context.get_measure("Classes/Parser.m", "complexity").value == 9


def test_sensor_context_rejects_duplicate_measure(project_dir):
    input_file = FileSystem(project_dir).input_file("Classes/Parser.m")
    context = SensorContext()
    context.save_measure(input_file, Measure(CoreMetrics.FUNCTIONS, 1))
    with pytest.raises(DuplicateMeasureError):
        context.save_measure(input_file, Measure(CoreMetrics.FUNCTIONS, 2))


def test_range_distribution_buckets():
    distribution = RangeDistribution((1, 2, 4))
    for value in (0, 1, 3, 3, 10):
        distribution.add(value)
    assert str(distribution) == "1=1;2=2;4=1"
