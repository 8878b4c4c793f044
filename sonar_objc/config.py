"""Configuration loading and validation.

Usage:
    config = load("sonar-objc.yaml")                        # raises ConfigError on bad config
    config = load("sonar-objc.yaml", require_server=True)   # also needs url + token
    settings = config.settings({"sonar.objectivec.lizard.report": "out.xml"})
    generate_template("sonar-objc.yaml")                    # writes example file to disk
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from sonar_objc.api import Settings

DEFAULT_CONFIG_PATH = "sonar-objc.yaml"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class ConfigError(Exception):
    """Raised when the configuration is missing or invalid."""


# ---------------------------------------------------------------------------
# Config dataclass
# ---------------------------------------------------------------------------

@dataclass
class Config:
    url: str = ""
    token: str = ""
    base_dir: str = "."
    properties: dict[str, str] = field(default_factory=dict)

    def settings(self, overrides: dict[str, str] | None = None) -> Settings:
        """Plugin settings: file ``properties`` with *overrides* applied on top."""
        return Settings({**self.properties, **(overrides or {})})


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------

def load(config_path: str = DEFAULT_CONFIG_PATH, *, missing_ok: bool = False,
         require_server: bool = False) -> Config:
    """Load and validate configuration from a YAML file.

    Environment variables SONAR_URL and SONAR_TOKEN override file values.
    With *missing_ok*, an absent file yields the defaults instead of an error.

    Raises:
        ConfigError: if the file is missing, malformed, or required fields
                     are absent.
    """
    path = Path(config_path)

    if not path.exists():
        if not missing_ok:
            raise ConfigError(
                f"Config file not found: '{config_path}'\n"
                "Run `sonar-objc init` to generate a template."
            )
        raw = {}
    else:
        try:
            with path.open(encoding="utf-8") as f:
                raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Failed to parse '{config_path}': {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigError(f"'{config_path}' must be a YAML mapping at the top level.")

    server = raw.get("server") or {}
    project = raw.get("project") or {}
    url   = os.environ.get("SONAR_URL")  or server.get("url",   "")
    token = os.environ.get("SONAR_TOKEN") or server.get("token", "")
    properties = raw.get("properties") or {}

    if not isinstance(properties, dict):
        raise ConfigError(f"'properties' in '{config_path}' must be a mapping.")

    config = Config(
        url=str(url).strip(),
        token=str(token).strip(),
        base_dir=str(project.get("base_dir") or "."),
        properties={str(k): str(v) for k, v in properties.items() if v is not None},
    )
    if require_server:
        _validate_server(config)
    return config


def _validate_server(config: Config) -> None:
    """Raise ConfigError if the server connection settings are missing."""
    errors: list[str] = []

    if not config.url:
        errors.append(
            "  - 'server.url' is missing (or set the SONAR_URL environment variable)"
        )
    if not config.token:
        errors.append(
            "  - 'server.token' is missing (or set the SONAR_TOKEN environment variable)"
        )

    if errors:
        raise ConfigError("Invalid configuration:\n" + "\n".join(errors))


def parse_property_overrides(pairs) -> dict[str, str]:
    """Turn ``["key=value", ...]`` (the ``-D`` options) into a mapping."""
    overrides: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise ConfigError(f"Invalid property '{pair}', expected KEY=VALUE")
        overrides[key.strip()] = value.strip()
    return overrides


# ---------------------------------------------------------------------------
# Template generator (used by `init` command)
# ---------------------------------------------------------------------------

TEMPLATE = """\
server:
  url: "https://sonar.example.com"
  token: "squ_xxxxxxxxxxxx"       # Only needed by check-rules / push-profile

project:
  base_dir: "."

properties:
  sonar.projectKey: "com.example.my-app"
  # Report locations, relative to base_dir unless absolute
  sonar.objectivec.lizard.report: "sonar-reports/lizard-report.xml"
  sonar.objectivec.oclint.report: "sonar-reports/oclint.xml"
  sonar.objectivec.fauxpas.report: "sonar-reports/fauxpas.json"
"""


def generate_template(output_path: str = DEFAULT_CONFIG_PATH) -> None:
    """Write a template sonar-objc.yaml to *output_path*.

    Raises:
        ConfigError: if the file already exists (to avoid overwriting secrets).
    """
    path = Path(output_path)
    if path.exists():
        raise ConfigError(
            f"'{output_path}' already exists. Remove it first or choose a different path."
        )
    path.write_text(TEMPLATE, encoding="utf-8")
