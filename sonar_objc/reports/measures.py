"""Measure report generator.

    build_measures_report(context, project_key)   -> dict

Measures are grouped per file as ``{metric_key: value}``; the summary totals
the additive metrics (complexity, functions) over the project.
"""

from datetime import datetime, timezone

#: Metrics summed into the project-level summary
_ADDITIVE_METRICS: list[str] = [
    "complexity",
    "functions",
    "complexity_in_functions",
]


def build_measures_report(context, project_key: str) -> dict:
    files = {
        path: {key: measure.value for key, measure in measures.items()}
        for path, measures in sorted(context.measures.items())
    }

    totals = {metric: 0 for metric in _ADDITIVE_METRICS}
    for values in files.values():
        for metric in _ADDITIVE_METRICS:
            totals[metric] += values.get(metric, 0)

    return {
        "report_type": "measures",
        "project_key": project_key,
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "summary": {
            "files": len(files),
            **totals,
        },
        "files": files,
    }
