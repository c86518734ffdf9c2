"""
Exception Log Profile - Default redaction rules.

Scrubs exception logs and chat prompts before they are handed to a hosted
model. Rules run in the order listed; later rules see the output of earlier
ones, so broad structural matches (emails, URLs, paths) come first and the
person-name heuristic comes last.

Patterns covered:
    - Emails, URLs, filesystem and network paths
    - IPv4/IPv6 addresses, GUIDs, timestamps, memory addresses
    - Credential key=value pairs, connection strings, session ids, JWTs
    - Credit cards, SSNs, phone numbers
    - AWS access key ids and PEM private key blocks
    - Person names (labelled, or bare capitalized word runs)
"""

import re
from typing import Iterable, Optional

from ..base_profile import ComplianceProfile, RedactionPattern

NAME_PLACEHOLDER = "[REDACTED_NAME]"

# Capitalized runs containing any of these (case-insensitive substring) are
# left alone, whether bare or after a name label.
DEFAULT_NAME_DENYLIST: tuple[str, ...] = (
    "System", "Exception", "Error", "Warning", "Info", "Debug", "Trace",
    "Microsoft", "Azure", "Windows", "Linux", "Server", "Client", "Database",
    "Application", "Service", "Process", "Thread", "Task", "Method", "Class",
    "File", "Directory", "Network", "Connection", "Request", "Response",
    "Null", "Reference", "Argument", "Invalid", "Access", "Denied", "Not",
    "Found",
)

# Characters that end a path token
_PATH_CHARS = r"""[^\s"'<>|:*?(),;\[\]]"""

# A space continues a path only when the next token reaches another backslash
_SPACED_PATH_CHARS = r"(?:" + _PATH_CHARS + r"| (?=" + _PATH_CHARS + r"+\\))"

_UNIX_ROOTS = "home|usr|var|opt|etc|tmp|root|mnt|proc|sys|dev|boot|lib|bin|sbin"

_HEX = "[0-9A-Fa-f]"

_OCTET = r"(?:25[0-5]|2[0-4]\d|1?\d?\d)"
_IPV4 = r"(?:" + _OCTET + r"\.){3}" + _OCTET


def _keep_key(placeholder: str, separator: Optional[str] = None):
    """Build a replacement that keeps group 1 and swaps the value for placeholder."""
    def replace(match: re.Match) -> str:
        if separator is None:
            return f"{match.group(1)}{placeholder}"
        return f"{match.group(1)}{separator}{placeholder}"
    return replace


class ExceptionLogProfile(ComplianceProfile):
    """
    Default profile for exception logs sent to an external chat model.

    Args:
        name_denylist: Terms that exempt a capitalized word run, labelled or
                       bare, from name redaction. Defaults to DEFAULT_NAME_DENYLIST.
    """

    def __init__(self, name_denylist: Optional[Iterable[str]] = None):
        terms = DEFAULT_NAME_DENYLIST if name_denylist is None else name_denylist
        self._denylist = tuple(term.strip().lower() for term in terms if term.strip())
        # Compiled once; the rule table is read-only after construction
        self._patterns = tuple(self._build_patterns())

    @property
    def name(self) -> str:
        return "exception_log"

    @property
    def description(self) -> str:
        return "PII, secrets and environment details found in exception logs"

    @property
    def name_denylist(self) -> tuple[str, ...]:
        return self._denylist

    def get_patterns(self) -> list[RedactionPattern]:
        return list(self._patterns)

    def _is_denylisted(self, candidate: str) -> bool:
        candidate = candidate.lower()
        return any(term in candidate for term in self._denylist)

    def _redact_labelled_name(self, match: re.Match) -> str:
        # "thrown by System Runtime" is prose, not an author
        if self._is_denylisted(match.group(2)):
            return match.group(0)
        return f"{match.group(1)}: {NAME_PLACEHOLDER}"

    def _redact_bare_name(self, match: re.Match) -> str:
        if self._is_denylisted(match.group(0)):
            return match.group(0)
        return NAME_PLACEHOLDER

    def _build_patterns(self) -> list[RedactionPattern]:
        return [
            RedactionPattern(
                name="email",
                pattern=re.compile(
                    r'\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b'
                ),
                replacement="[REDACTED_EMAIL]",
                description="Email address"
            ),

            RedactionPattern(
                name="url",
                pattern=re.compile(
                    r'\b(?:https?|ftp)://[^\s"\'<>]+|\bwww\.[^\s"\'<>]+',
                    re.IGNORECASE
                ),
                replacement="[REDACTED_URL]",
                description="http/https/ftp URL or bare www. host"
            ),

            # Paths
            RedactionPattern(
                name="windows_path",
                pattern=re.compile(r'\b[A-Za-z]:\\' + _SPACED_PATH_CHARS + r'*'),
                replacement="[REDACTED_PATH]",
                description="Windows absolute path (C:\\...)"
            ),
            RedactionPattern(
                name="unix_path",
                pattern=re.compile(
                    r'(?<![\w./\\])/(?:' + _UNIX_ROOTS + r')\b(?:/' + _PATH_CHARS + r'*)?'
                ),
                replacement="[REDACTED_PATH]",
                description="Unix absolute path under a well-known root"
            ),
            RedactionPattern(
                name="relative_path",
                pattern=re.compile(r'(?<![\w./\\])\.\.?/' + _PATH_CHARS + r'*'),
                replacement="[REDACTED_PATH]",
                description="Unix relative path (./ or ../)"
            ),
            RedactionPattern(
                name="unc_path",
                pattern=re.compile(r'\\\\[\w.$-]+\\' + _SPACED_PATH_CHARS + r'*'),
                replacement="[REDACTED_PATH]",
                description="UNC network path (\\\\server\\share)"
            ),
            RedactionPattern(
                name="stack_frame_path",
                pattern=re.compile(r'\b(in\s+)(?!\[REDACTED_)\S+?(?=:line\s*\d+)'),
                replacement=_keep_key("[REDACTED_PATH]"),
                description="Source file ahead of a ':line N' suffix"
            ),
            RedactionPattern(
                name="labelled_path",
                pattern=re.compile(
                    r'\b((?i:file|path|directory|folder|location)\s*[:=]\s*)'
                    r'[^\s,;]*[/\\][^\s,;]*'
                ),
                replacement=_keep_key("[REDACTED_PATH]"),
                description="Path value after a file/path/directory/folder/location key"
            ),

            # Network and identifiers
            # IPv6 first so an IPv4-mapped address goes out whole
            RedactionPattern(
                name="ipv6",
                pattern=re.compile(
                    r'(?<![\w:])(?:'
                    r'::(?:[fF]{4}:)?' + _IPV4 + r'|'  # IPv4-mapped
                    r'(?:' + _HEX + r'{1,4}:){7}' + _HEX + r'{1,4}|'  # full form
                    r'(?:' + _HEX + r'{1,4}:){1,7}:'  # compressed form
                    r'(?:' + _HEX + r'{1,4}(?::' + _HEX + r'{1,4}){0,6})?|'
                    r'::' + _HEX + r'{1,4}(?::' + _HEX + r'{1,4}){0,6}'  # leading ::
                    r')(?![\w:])'
                ),
                replacement="[REDACTED_IPV6]",
                description="IPv6 address"
            ),
            RedactionPattern(
                name="ipv4",
                pattern=re.compile(r'\b' + _IPV4 + r'\b'),
                replacement="[REDACTED_IP]",
                description="IPv4 dotted quad"
            ),
            RedactionPattern(
                name="guid",
                pattern=re.compile(
                    r'\b' + _HEX + r'{8}-' + _HEX + r'{4}-' + _HEX + r'{4}-'
                    + _HEX + r'{4}-' + _HEX + r'{12}\b'
                ),
                replacement="[REDACTED_GUID]",
                description="GUID/UUID (8-4-4-4-12)"
            ),
            RedactionPattern(
                name="timestamp",
                pattern=re.compile(
                    r'\b\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}:\d{2}'
                    r'(?:[.,]\d+)?(?:Z\b|[+-]\d{2}:?\d{2}\b|\b)'
                ),
                replacement="[REDACTED_TIMESTAMP]",
                description="ISO-8601 style date-time"
            ),
            RedactionPattern(
                name="memory_address",
                pattern=re.compile(r'\b0x' + _HEX + r'{8,16}\b'),
                replacement="[REDACTED_MEMORY_ADDRESS]",
                description="Memory address (0x + 8-16 hex digits)"
            ),

            # Secrets
            RedactionPattern(
                name="credential",
                pattern=re.compile(
                    r'\b((?i:api[_-]?key|access[_-]?token|secret[_-]?key|password'
                    r'|auth[_-]?token|bearer))\s*[:=]\s*\S+'
                ),
                replacement=_keep_key("[REDACTED]", "="),
                description="Credential in key=value or key: value form"
            ),

            # Personal data
            RedactionPattern(
                name="credit_card",
                pattern=re.compile(r'\b(?:\d{4}[- ]?){3}\d{4}\b'),
                replacement="[REDACTED_CARD]",
                description="16 digit card number, optionally grouped"
            ),
            RedactionPattern(
                name="ssn",
                pattern=re.compile(r'\b\d{3}-\d{2}-\d{4}\b'),
                replacement="[REDACTED_SSN]",
                description="US Social Security Number"
            ),
            RedactionPattern(
                name="phone",
                pattern=re.compile(
                    r'(?<!\w)(?:\+?1[-. ]?)?(?:\(\d{3}\)|\d{3})[-. ]?\d{3}[-. ]?\d{4}(?!\w)'
                ),
                replacement="[REDACTED_PHONE]",
                description="North American phone number"
            ),
            RedactionPattern(
                name="username",
                pattern=re.compile(
                    r'((?i:/users/|\\users\\|\buser=|\busername=))'
                    r'(?!\[REDACTED_)[^\s/\\;&,]+'
                ),
                replacement=_keep_key("[REDACTED_USER]"),
                description="User name in a path or query string"
            ),
            RedactionPattern(
                name="connection_string",
                pattern=re.compile(
                    r'\b((?i:server|host|data\s+source|database|uid|user\s+id'
                    r'|password|pwd))\s*=\s*(?!\[REDACTED)[^;\r\n]+'
                ),
                replacement=_keep_key("[REDACTED]", "="),
                description="Connection string key=value; pair"
            ),
            RedactionPattern(
                name="session_id",
                pattern=re.compile(
                    r'\b((?i:session[_-]?id|jsessionid|phpsessid|asp\.net_sessionid))'
                    r'\s*[:=]\s*[^\s;&,]+'
                ),
                replacement=_keep_key("[REDACTED_SESSION]", "="),
                description="Session identifier cookie or parameter"
            ),
            RedactionPattern(
                name="jwt",
                pattern=re.compile(
                    r'\beyJ[A-Za-z0-9_-]+\.eyJ[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+'
                ),
                replacement="[REDACTED_JWT]",
                description="JSON Web Token"
            ),
            RedactionPattern(
                name="aws_access_key",
                pattern=re.compile(r'\bAKIA[A-Z0-9]{16}\b'),
                replacement="[REDACTED_AWS_KEY]",
                description="AWS Access Key ID"
            ),
            RedactionPattern(
                name="private_key",
                pattern=re.compile(
                    r'-----BEGIN (?:RSA )?PRIVATE KEY-----[\s\S]*?'
                    r'-----END (?:RSA )?PRIVATE KEY-----'
                ),
                replacement="[REDACTED_PRIVATE_KEY]",
                description="PEM private key block"
            ),

            # Names last: emails and labelled fields are already gone
            RedactionPattern(
                name="labelled_name",
                pattern=re.compile(
                    r'\b((?i:created\s+by|modified\s+by|user|author|developer'
                    r'|owner|by|name))\s*[:=]?[ \t]*'
                    r'([A-Z][a-z]+(?:[ \t]+[A-Z][a-z]+)+)\b'
                ),
                replacement=self._redact_labelled_name,
                description="Capitalized name after an author/owner/user style label"
            ),
            RedactionPattern(
                name="person_name",
                pattern=re.compile(r'\b[A-Z][a-z]{2,}(?:[ \t]+[A-Z][a-z]{2,}){1,2}\b'),
                replacement=self._redact_bare_name,
                description="Bare two or three word capitalized name, minus denylisted terms"
            ),
        ]


# Export the default profile
DEFAULT_PROFILE = ExceptionLogProfile()
