"""Tests for sonar_objc/reports"""

from sonar_objc.api import FileSystem, Settings
from sonar_objc.models import Issue, Rule, RulesProfile
from sonar_objc.plugin import ObjectiveCPlugin
from sonar_objc.reports.issues import _build_summary, build_generic_issues, build_issues_report
from sonar_objc.reports.measures import build_measures_report
from sonar_objc.reports.rules import get_rules_diff, push_profile
from sonar_objc.violations.oclint.rule_repository import OCLintRuleRepository

BASE = "https://sonar.example.com"


def _client():
    from sonar_objc.client import SonarClient
    return SonarClient(BASE, "tok")


def _issue(repo="OCLint", key="long line", severity="MINOR", line=3) -> Issue:
    return Issue(rule=Rule(repo, key, key, severity=severity), path="Classes/A.m",
                 line=line, message="msg")


# ---------------------------------------------------------------------------
# issues
# ---------------------------------------------------------------------------

def test_summary_counts_by_severity_and_repository():
    s = _build_summary([
        _issue(severity="MAJOR"),
        _issue(repo="FauxPas", key="NSLogUsed", severity="INFO"),
        _issue(severity="MAJOR"),
    ])
    assert s["total"] == 3
    assert s["by_severity"]["MAJOR"] == 2
    assert s["by_severity"]["INFO"] == 1
    assert s["by_severity"]["BLOCKER"] == 0
    assert s["by_repository"] == {"OCLint": 2, "FauxPas": 1}


def test_generic_issue_format():
    class _Context:
        issues = [_issue(line=None), _issue(key="dead code", line=8)]

    generic = build_generic_issues(_Context())["issues"]
    assert generic[0] == {
        "engineId": "OCLint",
        "ruleId": "long line",
        "severity": "MINOR",
        "type": "CODE_SMELL",
        "primaryLocation": {"message": "msg", "filePath": "Classes/A.m"},
    }
    assert generic[1]["primaryLocation"]["textRange"] == {"startLine": 8}


def test_issues_report_from_analysis(project_dir):
    context = ObjectiveCPlugin().run_analysis(FileSystem(project_dir), Settings())
    report = build_issues_report(context, "app")
    assert report["report_type"] == "issues"
    assert report["summary"]["total"] == 5
    assert report["issues"][0]["rule"] == "OCLint:long line"


# ---------------------------------------------------------------------------
# measures
# ---------------------------------------------------------------------------

def test_measures_report(project_dir):
    context = ObjectiveCPlugin().run_analysis(FileSystem(project_dir), Settings())
    report = build_measures_report(context, "app")

    assert report["summary"] == {
        "files": 3,
        "complexity": 13,
        "functions": 3,
        "complexity_in_functions": 13,
    }
    assert report["files"]["Classes/Parser.m"]["function_complexity"] == 9.0


# ---------------------------------------------------------------------------
# rules diff / profile push
# ---------------------------------------------------------------------------

def test_rules_diff(requests_mock):
    adapter = requests_mock.get(f"{BASE}/api/rules/search", json={
        "rules": [{"key": "OCLint:long line"}, {"key": "OCLint:server only rule"}],
        "total": 2,
    })
    diff = get_rules_diff(_client(), OCLintRuleRepository())

    assert "repositories=OCLint" in adapter.last_request.url
    assert diff["remote_count"] == 2
    assert diff["unknown_locally"] == ["server only rule"]
    assert "long line" not in diff["missing_on_server"]
    assert "dead code" in diff["missing_on_server"]


def test_push_profile(requests_mock):
    adapter = requests_mock.post(f"{BASE}/api/qualityprofiles/restore", json={"ruleSuccesses": 1})
    profile = RulesProfile(name="OCLint", language="objc")
    profile.activate_rule(Rule("OCLint", "long line", "long line", severity="MINOR"))

    result = push_profile(_client(), profile)

    assert result["active_rules"] == 1
    assert result["server"] == {"ruleSuccesses": 1}
    assert b"<key>long line</key>" in adapter.last_request.body
