"""
Base Compliance Profile - Abstract base class for redaction rules.

A profile is an ordered table of rewrite rules. The engine applies every
pattern of every loaded profile in sequence, each one rewriting the output
of the previous one, so the order returned by get_patterns() matters:
an email has to be replaced before the path and name rules get to see it.

Each profile defines:
    - name: Unique identifier for the profile
    - description: Human-readable description
    - get_patterns(): Returns the ordered regex rules
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from re import Match, Pattern
from typing import Callable, Union

# Either a fixed placeholder (backreferences allowed) or a function of the match
Replacement = Union[str, Callable[[Match[str]], str]]


@dataclass(frozen=True)
class RedactionPattern:
    """A single redaction rule."""
    name: str  # e.g., "email", "ssn"
    pattern: Pattern[str]  # Compiled regex pattern
    replacement: Replacement  # e.g., "[REDACTED_EMAIL]" or a callable
    description: str = ""  # Human-readable description

    def apply(self, text: str) -> str:
        """Run the rule over text."""
        return self.pattern.sub(self.replacement, text)


class ComplianceProfile(ABC):
    """
    Abstract base class for compliance profiles.

    Subclass this to add new rule sets without modifying the core
    RedactionEngine.

    Example:
        class TicketProfile(ComplianceProfile):
            @property
            def name(self) -> str:
                return "tickets"

            @property
            def description(self) -> str:
                return "Internal ticket identifiers"

            def get_patterns(self) -> list[RedactionPattern]:
                return [
                    RedactionPattern(
                        name="ticket_id",
                        pattern=re.compile(r'\\bTCK-\\d{6}\\b'),
                        replacement="[REDACTED_TICKET]",
                    ),
                ]
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique identifier for this profile (e.g., 'exception_log')."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description of what this profile covers."""
        pass

    @abstractmethod
    def get_patterns(self) -> list[RedactionPattern]:
        """
        Return the RedactionPattern objects to apply, in application order.

        Patterns run after line-ending normalization and before stack frame
        capping and the length cap.
        """
        pass

    def __repr__(self) -> str:
        return f"<ComplianceProfile: {self.name}>"
