"""Host extension points and the in-process runtime backing them.

The analysis platform drives every adapter in this package through three
contracts:

    Sensor              should_execute_on_project(project) / analyse(project, context)
    ProfileDefinition   create_profile(messages) -> RulesProfile
    RuleRepository      create_rules() -> list[Rule]

``Settings``, ``FileSystem``, ``SensorContext``, ``RuleFinder`` and
``ValidationMessages`` are what the host hands to those callbacks.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from sonar_objc.language import ObjectiveC
from sonar_objc.models import Issue, Measure, Rule, RulesProfile

logger = logging.getLogger(__name__)

_LANGUAGES = (ObjectiveC,)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class DuplicateMeasureError(Exception):
    """Raised when a metric is saved twice for the same file."""


class ReportParseError(Exception):
    """Raised when a tool report cannot be decoded."""


# ---------------------------------------------------------------------------
# Runtime objects handed to extensions
# ---------------------------------------------------------------------------

@dataclass
class Project:
    key: str
    name: str | None = None


class Settings:
    """Flat ``key -> string`` plugin properties."""

    def __init__(self, properties: dict | None = None) -> None:
        self._properties = {k: str(v) for k, v in (properties or {}).items() if v is not None}

    def get_string(self, key: str) -> str | None:
        return self._properties.get(key)

    def set_property(self, key: str, value) -> None:
        self._properties[key] = str(value)

    def as_dict(self) -> dict[str, str]:
        return dict(self._properties)


@dataclass(frozen=True)
class InputFile:
    path: Path
    relative_path: str
    language: str | None


class FileSystem:
    """Source files of the analysed project, indexed once on creation."""

    def __init__(self, base_dir) -> None:
        self.base_dir = Path(base_dir).resolve()
        self._files: dict[Path, InputFile] = {}
        if self.base_dir.is_dir():
            for path in sorted(self.base_dir.rglob("*")):
                if path.is_file():
                    self._index(path)

    def _index(self, path: Path) -> None:
        language = next((lang.KEY for lang in _LANGUAGES if lang.matches(path)), None)
        relative = path.relative_to(self.base_dir).as_posix()
        # Keyed by resolved path, the same key input_file() looks up
        self._files.setdefault(
            path.resolve(), InputFile(path=path, relative_path=relative, language=language)
        )

    def languages(self) -> set[str]:
        return {f.language for f in self._files.values() if f.language}

    def input_files(self, language: str | None = None) -> list[InputFile]:
        return [f for f in self._files.values() if language is None or f.language == language]

    def input_file(self, path) -> InputFile | None:
        """Return the indexed file at *path* (relative paths start at base_dir)."""
        candidate = Path(path)
        if not candidate.is_absolute():
            candidate = self.base_dir / candidate
        return self._files.get(candidate.resolve())


class SensorContext:
    """Collects the measures and issues contributed by sensors."""

    def __init__(self) -> None:
        self.measures: dict[str, dict[str, Measure]] = {}
        self.issues: list[Issue] = []

    def save_measure(self, input_file: InputFile, measure: Measure) -> Measure:
        file_measures = self.measures.setdefault(input_file.relative_path, {})
        if measure.metric.key in file_measures:
            raise DuplicateMeasureError(
                f"Can not add the same measure twice on {input_file.relative_path}: "
                f"{measure.metric.key}"
            )
        file_measures[measure.metric.key] = measure
        return measure

    def get_measure(self, relative_path: str, metric_key: str) -> Measure | None:
        return self.measures.get(relative_path, {}).get(metric_key)

    def add_issue(self, issue: Issue) -> None:
        self.issues.append(issue)


class ValidationMessages:
    def __init__(self) -> None:
        self.warnings: list[str] = []
        self.errors: list[str] = []

    def add_warning_text(self, text: str) -> None:
        logger.warning(text)
        self.warnings.append(text)

    def add_error_text(self, text: str) -> None:
        logger.error(text)
        self.errors.append(text)

    def has_errors(self) -> bool:
        return bool(self.errors)

    def to_dict(self) -> dict:
        return {"warnings": list(self.warnings), "errors": list(self.errors)}


# ---------------------------------------------------------------------------
# Extension points
# ---------------------------------------------------------------------------

class Sensor(ABC):
    @abstractmethod
    def should_execute_on_project(self, project: Project) -> bool:
        ...

    @abstractmethod
    def analyse(self, project: Project, context: SensorContext) -> None:
        ...


class RuleRepository(ABC):
    key: str
    language: str
    name: str

    @abstractmethod
    def create_rules(self) -> list[Rule]:
        ...


class ProfileDefinition(ABC):
    @abstractmethod
    def create_profile(self, messages: ValidationMessages) -> RulesProfile:
        ...


class RuleFinder:
    """Look up rules across the registered repositories."""

    def __init__(self, repositories=()) -> None:
        self._rules: dict[tuple[str, str], Rule] = {}
        for repository in repositories:
            for rule in repository.create_rules():
                self._rules[(rule.repository_key, rule.key)] = rule

    def find_by_key(self, repository_key: str, rule_key: str) -> Rule | None:
        return self._rules.get((repository_key, rule_key))

    def find_all(self, repository_key: str) -> list[Rule]:
        return [r for (repo, _), r in self._rules.items() if repo == repository_key]
