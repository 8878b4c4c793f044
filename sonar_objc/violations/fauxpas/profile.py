from sonar_objc.violations.fauxpas.rule_repository import REPOSITORY_KEY
from sonar_objc.violations.profile import BundledProfile, ProfileImporter


class FauxPasProfileImporter(ProfileImporter):
    pass


class FauxPasProfile(BundledProfile):
    TOOL_NAME = "FauxPas"
    DEFAULT_PROFILE = "fauxpas/profile-fauxpas.xml"
    REPOSITORY_KEY = REPOSITORY_KEY
