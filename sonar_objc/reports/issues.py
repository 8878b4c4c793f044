"""Issue report generators.

Functions:
    build_issues_report(context, project_key)   -> dict
    build_generic_issues(context)               -> dict  (external issues import format)
"""

from datetime import datetime, timezone

from sonar_objc.models import SEVERITIES, Issue

# Platform issue type used for every imported violation
_ISSUE_TYPE = "CODE_SMELL"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def build_issues_report(context, project_key: str) -> dict:
    """Return the issues collected by the violation sensors, with a summary."""
    issues = [i.to_dict() for i in context.issues]
    return {
        "report_type":  "issues",
        "project_key":  project_key,
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "summary": _build_summary(context.issues),
        "issues":  issues,
    }


def build_generic_issues(context) -> dict:
    """Return the issues in the platform's generic external issue format.

    The result can be fed to a scanner through ``sonar.externalIssuesReportPaths``.
    """
    return {"issues": [_to_generic(i) for i in context.issues]}


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _to_generic(issue: Issue) -> dict:
    location: dict = {
        "message":  issue.message,
        "filePath": issue.path,
    }
    if issue.line:
        location["textRange"] = {"startLine": issue.line}
    return {
        "engineId":        issue.rule.repository_key,
        "ruleId":          issue.rule.key,
        "severity":        issue.severity or issue.rule.severity,
        "type":            _ISSUE_TYPE,
        "primaryLocation": location,
    }


def _build_summary(issues: list[Issue]) -> dict:
    by_severity = {s: 0 for s in SEVERITIES}
    by_repository: dict[str, int] = {}

    for issue in issues:
        sev = issue.severity or issue.rule.severity
        if sev in by_severity:
            by_severity[sev] += 1
        repo = issue.rule.repository_key
        by_repository[repo] = by_repository.get(repo, 0) + 1

    return {
        "total":         len(issues),
        "by_severity":   by_severity,
        "by_repository": by_repository,
    }
