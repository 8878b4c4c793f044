"""Read and write rule profiles in the platform's XML backup format.

    <profile>
      <name>OCLint</name>
      <language>objc</language>
      <rules>
        <rule>
          <repositoryKey>OCLint</repositoryKey>
          <key>LongLine</key>
          <priority>MINOR</priority>      <!-- optional -->
        </rule>
      </rules>
    </profile>
"""

import logging
import xml.etree.ElementTree as ET

from sonar_objc.models import SEVERITIES, RulesProfile

logger = logging.getLogger(__name__)


class XMLProfileParser:
    """Build a :class:`RulesProfile`, resolving each rule through *rule_finder*."""

    def __init__(self, rule_finder) -> None:
        self.rule_finder = rule_finder

    def parse(self, reader, messages) -> RulesProfile:
        """Parse a profile from a string or a text stream.

        Problems are reported through *messages*: unknown rules are skipped
        with a warning, an unreadable document yields an error and an empty
        profile.
        """
        text = reader if isinstance(reader, str) else reader.read()
        profile = RulesProfile()
        try:
            root = ET.fromstring(text)
        except ET.ParseError as exc:
            messages.add_error_text(f"Unable to parse the profile XML: {exc}")
            return profile

        if root.tag != "profile":
            messages.add_error_text(f"Expected a <profile> document, got <{root.tag}>")
            return profile

        profile.name = _text(root.find("name"))
        profile.language = _text(root.find("language"))

        for rule_element in root.iterfind("rules/rule"):
            repository_key = _text(rule_element.find("repositoryKey"))
            rule_key = _text(rule_element.find("key"))
            priority = _text(rule_element.find("priority"))

            rule = self.rule_finder.find_by_key(repository_key, rule_key)
            if rule is None:
                messages.add_warning_text(f"Rule not found: [repository={repository_key}, key={rule_key}]")
                continue
            if priority is not None and priority not in SEVERITIES:
                messages.add_warning_text(f"Unknown priority '{priority}' for rule {rule_key}")
                priority = None
            profile.activate_rule(rule, priority)

        logger.debug("Parsed profile '%s' with %d active rule(s)",
                     profile.name, len(profile.active_rules))
        return profile


def profile_to_xml(profile: RulesProfile) -> str:
    """Serialize *profile* back to the backup format read by :class:`XMLProfileParser`."""
    root = ET.Element("profile")
    ET.SubElement(root, "name").text = profile.name
    ET.SubElement(root, "language").text = profile.language
    rules = ET.SubElement(root, "rules")
    for active in profile.active_rules:
        rule = ET.SubElement(rules, "rule")
        ET.SubElement(rule, "repositoryKey").text = active.rule.repository_key
        ET.SubElement(rule, "key").text = active.rule.key
        ET.SubElement(rule, "priority").text = active.severity
    ET.indent(root)
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + ET.tostring(root, encoding="unicode") + "\n"


def _text(element) -> str | None:
    if element is None or element.text is None:
        return None
    return element.text.strip()
