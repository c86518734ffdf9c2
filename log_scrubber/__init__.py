"""
Log Scrubber - Redaction of exception logs before they reach a hosted model.

This module scrubs PII, credentials and environment details out of free-text
logs and chat prompts so they can be forwarded to a chat-completion API.

Architecture:
    - RedactionEngine: Runs normalization, profile rules, stack frame capping
      and the length cap in a fixed order
    - ComplianceProfile: Abstract base class for ordered rule tables
    - profiles/: The default exception log profile and optional extras

Example:
    from log_scrubber import RedactionEngine

    engine = RedactionEngine()
    safe_text, was_redacted = engine.redact("User email: john@example.com")
    # safe_text: "User email: [REDACTED_EMAIL]"
    # was_redacted: True
"""

from .base_profile import ComplianceProfile, RedactionPattern
from .config import ScrubberConfig
from .engine import RedactionEngine, RedactionResult, get_default_engine, redact

__all__ = [
    "ComplianceProfile",
    "RedactionEngine",
    "RedactionPattern",
    "RedactionResult",
    "ScrubberConfig",
    "get_default_engine",
    "redact",
]
