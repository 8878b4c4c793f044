"""Default rule profiles bundled with the plugin.

Each profile is imported once, when the plugin registers it, from an XML
resource and then renamed after its rule repository.
"""

import logging

from sonar_objc import resources
from sonar_objc.api import ProfileDefinition
from sonar_objc.language import ObjectiveC
from sonar_objc.profile_parser import XMLProfileParser

logger = logging.getLogger(__name__)


class ProfileImporter:
    """Import a profile document, checking its rules against *rule_finder*."""

    def __init__(self, rule_finder) -> None:
        self.parser = XMLProfileParser(rule_finder)

    def import_profile(self, reader, messages):
        return self.parser.parse(reader, messages)


class BundledProfile(ProfileDefinition):
    """Profile read from the resource ``DEFAULT_PROFILE``."""

    TOOL_NAME: str
    DEFAULT_PROFILE: str
    REPOSITORY_KEY: str

    def __init__(self, importer: ProfileImporter) -> None:
        self.profile_importer = importer

    def create_profile(self, messages):
        logger.info("Creating %s Profile", self.TOOL_NAME)
        config = resources.read_text(self.DEFAULT_PROFILE)
        profile = self.profile_importer.import_profile(config, messages)
        profile.name = self.REPOSITORY_KEY
        profile.language = ObjectiveC.KEY
        return profile
