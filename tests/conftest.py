"""Shared fixtures: a small Objective-C project with its tool reports."""

import shutil
from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"

SOURCES = {
    "Classes/AppDelegate.m": "#import \"AppDelegate.h\"\n@implementation AppDelegate\n@end\n",
    "Classes/AppDelegate.h": "@interface AppDelegate : NSObject\n@end\n",
    "Classes/Parser.m": "#import \"Parser.h\"\n@implementation Parser\n@end\n",
    "Classes/Parser.h": "@interface Parser : NSObject\n@end\n",
    "README.md": "# MyApp\n",
}


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def project_dir(tmp_path) -> Path:
    """Objective-C sources plus every report under ``sonar-reports/``."""
    for relative, content in SOURCES.items():
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")

    reports = tmp_path / "sonar-reports"
    reports.mkdir()
    shutil.copy(FIXTURES_DIR / "lizard-report.xml", reports / "lizard-report.xml")
    shutil.copy(FIXTURES_DIR / "oclint.xml", reports / "oclint.xml")
    shutil.copy(FIXTURES_DIR / "fauxpas.json", reports / "fauxpas.json")
    return tmp_path
