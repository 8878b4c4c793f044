"""Plugin entry point: extension registry and the analysis run.

Usage:
    plugin   = ObjectiveCPlugin()
    context  = plugin.run_analysis(FileSystem("."), Settings({...}))
    profiles = plugin.create_profiles()
"""

import logging
from pathlib import Path

from sonar_objc.api import (
    FileSystem,
    Project,
    RuleFinder,
    SensorContext,
    Settings,
    ValidationMessages,
)
from sonar_objc.complexity.lizard_sensor import LizardSensor
from sonar_objc.language import PROPERTY_PREFIX, ObjectiveC
from sonar_objc.violations.fauxpas.profile import FauxPasProfile, FauxPasProfileImporter
from sonar_objc.violations.fauxpas.rule_repository import FauxPasRuleRepository
from sonar_objc.violations.fauxpas.sensor import FauxPasSensor
from sonar_objc.violations.oclint.profile import OCLintProfile, OCLintProfileImporter
from sonar_objc.violations.oclint.rule_repository import OCLintRuleRepository
from sonar_objc.violations.oclint.sensor import OCLintSensor

logger = logging.getLogger(__name__)


class UnknownRepositoryError(Exception):
    """Raised when no rule repository or profile matches the requested key."""


class ObjectiveCPlugin:
    PROPERTY_PREFIX = PROPERTY_PREFIX
    PROJECT_KEY_PROPERTY = "sonar.projectKey"

    def __init__(self) -> None:
        self.rule_repositories = [OCLintRuleRepository(), FauxPasRuleRepository()]
        self._rule_finder: RuleFinder | None = None

    @property
    def rule_finder(self) -> RuleFinder:
        if self._rule_finder is None:
            self._rule_finder = RuleFinder(self.rule_repositories)
        return self._rule_finder

    def rule_repository(self, key: str):
        for repository in self.rule_repositories:
            if repository.key.lower() == key.lower():
                return repository
        available = ", ".join(r.key for r in self.rule_repositories)
        raise UnknownRepositoryError(f"Unknown rule repository '{key}'. Available: {available}")

    # ------------------------------------------------------------------
    # Extensions
    # ------------------------------------------------------------------

    def sensors(self, file_system: FileSystem, settings: Settings) -> list:
        return [
            LizardSensor(file_system, settings),
            OCLintSensor(file_system, settings, self.rule_finder),
            FauxPasSensor(file_system, settings, self.rule_finder),
        ]

    def profile_definitions(self) -> list:
        return [
            OCLintProfile(OCLintProfileImporter(self.rule_finder)),
            FauxPasProfile(FauxPasProfileImporter(self.rule_finder)),
        ]

    # ------------------------------------------------------------------
    # Host callbacks
    # ------------------------------------------------------------------

    def run_analysis(self, file_system: FileSystem, settings: Settings,
                     project: Project | None = None) -> SensorContext:
        """Run every sensor that applies to the project and return the context."""
        if project is None:
            key = settings.get_string(self.PROJECT_KEY_PROPERTY) or Path(file_system.base_dir).name
            project = Project(key=key)

        context = SensorContext()
        for sensor in self.sensors(file_system, settings):
            name = type(sensor).__name__
            if not sensor.should_execute_on_project(project):
                logger.info("%s skipped: no %s sources in %s",
                            name, ObjectiveC.NAME, file_system.base_dir)
                continue
            logger.info("Sensor %s", name)
            sensor.analyse(project, context)
        return context

    def create_profiles(self) -> list[tuple]:
        """Return ``(profile, messages)`` for every bundled profile."""
        results = []
        for definition in self.profile_definitions():
            messages = ValidationMessages()
            results.append((definition.create_profile(messages), messages))
        return results

    def create_profile(self, repository_key: str):
        for profile, messages in self.create_profiles():
            if profile.name.lower() == repository_key.lower():
                return profile, messages
        raise UnknownRepositoryError(f"No bundled profile for repository '{repository_key}'")
