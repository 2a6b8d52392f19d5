"""Validation hints plugin.

Attaches a human-readable validation rule to variables whose names
contain a well-known keyword (``DATABASE_URL`` -> "Must be a valid URL").
"""

from typing import Optional

from env_doc.core.models import DeclaredVariable
from env_doc.plugins.base import Plugin, PluginHost, PluginRegistry

# Checked in order, first keyword contained in the name wins
VALIDATION_RULES: list[tuple[str, str]] = [
    ("URL", "Must be a valid URL"),
    ("PORT", "Must be a valid port number (0-65535)"),
    ("EMAIL", "Must be a valid email address"),
    ("PATH", "Must be a valid file system path"),
    ("PASSWORD", "Should be at least 8 characters long"),
    ("KEY", "Should be a valid API key format"),
    ("TOKEN", "Should be a valid authentication token"),
    ("TIMEOUT", "Must be a positive integer (in milliseconds)"),
    ("HOST", "Must be a valid hostname"),
    ("IP", "Must be a valid IP address"),
]


def validation_rule_for(name: str) -> Optional[str]:
    for keyword, rule in VALIDATION_RULES:
        if keyword in name:
            return rule
    return None


class ValidationHintsPlugin(Plugin):
    """Adds ``metadata["validation"]`` before exclusion filtering."""

    @property
    def name(self) -> str:
        return "validation-hints"

    def apply(self, host: PluginHost) -> None:
        host.hooks.before_parse.tap(self.name, self.process_variables)

    def process_variables(
        self, variables: dict[str, DeclaredVariable]
    ) -> dict[str, DeclaredVariable]:
        for name, variable in variables.items():
            rule = validation_rule_for(name)
            if rule:
                variable.metadata["validation"] = rule
        return variables


# Auto-register plugin
PluginRegistry.register("validation-hints", ValidationHintsPlugin)
