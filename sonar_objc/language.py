"""Objective-C language definition and plugin-wide constants."""

PROPERTY_PREFIX = "sonar.objectivec"


class ObjectiveC:
    KEY = "objc"
    NAME = "Objective-C"
    FILE_SUFFIXES = (".h", ".m")

    @classmethod
    def matches(cls, path) -> bool:
        return str(path).endswith(cls.FILE_SUFFIXES)
