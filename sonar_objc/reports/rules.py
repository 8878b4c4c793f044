"""Compare bundled rules with a SonarQube server and publish profiles.

Functions:
    get_rules_diff(client, repository)   -> dict
    push_profile(client, profile)        -> dict
"""

import logging
from datetime import datetime, timezone

from sonar_objc.profile_parser import profile_to_xml

logger = logging.getLogger(__name__)


def get_rules_diff(client, repository) -> dict:
    """List rules bundled here but absent on the server, and vice versa."""
    params = {
        "repositories": repository.key,
        "languages":    repository.language,
    }
    remote = client.get_paginated("/api/rules/search", params, results_key="rules")
    # Server rule keys are "<repository>:<key>"
    remote_keys = {r["key"].split(":", 1)[-1] for r in remote}
    local_keys = {r.key for r in repository.create_rules()}

    return {
        "report_type":       "rules_diff",
        "repository":        repository.key,
        "generated_at":      datetime.now(timezone.utc).isoformat(),
        "local_count":       len(local_keys),
        "remote_count":      len(remote_keys),
        "missing_on_server": sorted(local_keys - remote_keys),
        "unknown_locally":   sorted(remote_keys - local_keys),
    }


def push_profile(client, profile) -> dict:
    """Restore *profile* on the server from its XML backup."""
    logger.info("Restoring profile '%s' (%d rules)", profile.name, len(profile.active_rules))
    response = client.post_file(
        "/api/qualityprofiles/restore",
        field_name="backup",
        file_name=f"{profile.name}.xml",
        content=profile_to_xml(profile),
    )
    return {
        "report_type":  "profile_restore",
        "profile":      profile.name,
        "language":     profile.language,
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "active_rules": len(profile.active_rules),
        "server":       response,
    }
