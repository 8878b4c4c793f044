from sonar_objc.violations.oclint.rule_repository import REPOSITORY_KEY
from sonar_objc.violations.profile import BundledProfile, ProfileImporter


class OCLintProfileImporter(ProfileImporter):
    pass


class OCLintProfile(BundledProfile):
    TOOL_NAME = "OCLint"
    DEFAULT_PROFILE = "oclint/profile-oclint.xml"
    REPOSITORY_KEY = REPOSITORY_KEY
