"""
Compliance Profiles Package

This package contains the redaction profiles the engine can load.

Available profiles:
    - exception_log: Default rules for exception logs and chat prompts
    - developer_tokens: Optional GitHub/Slack/bearer token rules

To add a new profile:
    1. Create a new file (e.g., tickets.py)
    2. Subclass ComplianceProfile
    3. Implement get_patterns() with your RedactionPatterns
    4. Register it in OPTIONAL_PROFILES or use engine.load_profile()
"""

from .developer_tokens import DeveloperTokenProfile
from .exception_log import DEFAULT_NAME_DENYLIST, DEFAULT_PROFILE, ExceptionLogProfile

# Profiles that can be switched on by name from configuration
OPTIONAL_PROFILES = {
    "developer_tokens": DeveloperTokenProfile,
}

__all__ = [
    "DEFAULT_NAME_DENYLIST",
    "DEFAULT_PROFILE",
    "DeveloperTokenProfile",
    "ExceptionLogProfile",
    "OPTIONAL_PROFILES",
]
