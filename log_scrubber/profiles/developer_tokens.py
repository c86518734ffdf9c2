"""
Developer Token Profile - Optional rules for service tokens.

Not loaded by default. Enable it with SCRUBBER_EXTRA_PROFILES=developer_tokens
or engine.load_profile(DeveloperTokenProfile()).

Patterns covered:
    - GitHub personal access tokens (ghp_, gho_, ghu_, ghs_, ghr_)
    - Slack API tokens (xoxb-, xoxp-, ...)
    - Opaque "Bearer <token>" authorization values
"""

import re
from ..base_profile import ComplianceProfile, RedactionPattern


class DeveloperTokenProfile(ComplianceProfile):
    """Tokens issued by developer platforms that show up in CI and bot logs."""

    @property
    def name(self) -> str:
        return "developer_tokens"

    @property
    def description(self) -> str:
        return "GitHub, Slack and bearer tokens"

    def get_patterns(self) -> list[RedactionPattern]:
        return [
            RedactionPattern(
                name="github_token",
                pattern=re.compile(
                    r'\bgh[pousr]_[A-Za-z0-9]{36}\b'
                ),
                replacement="[REDACTED_GITHUB_TOKEN]",
                description="GitHub personal access token"
            ),
            RedactionPattern(
                name="slack_token",
                pattern=re.compile(
                    r'\bxox[baprs]-[A-Za-z0-9-]+'
                ),
                replacement="[REDACTED_SLACK_TOKEN]",
                description="Slack API token"
            ),
            # The default profile only catches "bearer: x" / "bearer=x"
            RedactionPattern(
                name="bearer_header",
                pattern=re.compile(
                    r'\b((?i:bearer))\s+(?!\[REDACTED)[A-Za-z0-9._~+/-]{8,}=*'
                ),
                replacement=r"\1 [REDACTED_TOKEN]",
                description="Bearer token in an Authorization header"
            ),
        ]
