"""Objective-C support for SonarQube: Lizard, OCLint and FauxPas report import."""

__version__ = "0.5.0"
