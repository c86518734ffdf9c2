"""
RedactionEngine - Core engine for sanitizing exception logs.

This engine orchestrates, in fixed order:
1. Line-ending normalization and trimming
2. The rules of every loaded compliance profile, in load order
3. Stack trace frame capping
4. The output length cap

Stateless across calls and safe to share between threads once profiles
are loaded.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from .base_profile import ComplianceProfile
from .config import DEFAULT_MAX_LENGTH, ScrubberConfig
from .profiles import DEFAULT_PROFILE, OPTIONAL_PROFILES, ExceptionLogProfile
from .stack_frames import DEFAULT_MAX_FRAMES, cap_stack_frames

logger = logging.getLogger(__name__)

TRUNCATION_MARKER = "\n... [truncated: original length {length} characters]"


@dataclass(frozen=True)
class RedactionResult:
    """Outcome of a single redaction pass."""
    text: str
    changed: bool
    original_length: int
    rules_applied: tuple[str, ...] = ()
    frames_omitted: int = 0
    truncated: bool = False


def normalize_line_endings(text: str) -> str:
    """Convert CRLF and lone CR to LF and trim the whole blob."""
    return text.replace("\r\n", "\n").replace("\r", "\n").strip()


class RedactionEngine:
    """
    Engine for sanitizing sensitive data from log text.

    Example:
        engine = RedactionEngine()

        safe_text, was_redacted = engine.redact("Contact: jane.doe@example.com")
        # safe_text: "Contact: [REDACTED_EMAIL]"
        # was_redacted: True

        # With an optional profile
        from log_scrubber.profiles import DeveloperTokenProfile
        engine.load_profile(DeveloperTokenProfile())

    Thread Safety:
        redact() keeps no state between calls. load_profile() and
        unload_profile() should only be called during initialization.
    """

    def __init__(
        self,
        load_default_profile: bool = True,
        max_length: int = DEFAULT_MAX_LENGTH,
        max_stack_frames: int = DEFAULT_MAX_FRAMES,
        name_denylist: Optional[Iterable[str]] = None,
    ):
        """
        Initialize the RedactionEngine.

        Args:
            load_default_profile: If True, loads the exception log profile.
                                  Set to False for a clean slate.
            max_length: Maximum output length, truncation marker included.
            max_stack_frames: Frames kept per contiguous stack trace run.
            name_denylist: Override for the default profile's name denylist.
        """
        self._profiles: dict[str, ComplianceProfile] = {}
        self.max_length = max_length
        self.max_stack_frames = max_stack_frames

        if load_default_profile:
            if name_denylist is None:
                self.load_profile(DEFAULT_PROFILE)
            else:
                self.load_profile(ExceptionLogProfile(name_denylist=name_denylist))

    @classmethod
    def from_config(cls, config: ScrubberConfig) -> "RedactionEngine":
        """
        Build an engine from a ScrubberConfig.

        Raises:
            ValueError: If config names an unknown optional profile.
        """
        engine = cls(
            max_length=config.max_length,
            max_stack_frames=config.max_stack_frames,
            name_denylist=config.name_denylist,
        )
        for profile_name in config.extra_profiles:
            profile_cls = OPTIONAL_PROFILES.get(profile_name)
            if profile_cls is None:
                known = ", ".join(sorted(OPTIONAL_PROFILES))
                raise ValueError(f"Unknown profile '{profile_name}' (available: {known})")
            engine.load_profile(profile_cls())
        return engine

    def load_profile(self, profile: ComplianceProfile) -> None:
        """
        Load a compliance profile into the engine.

        Args:
            profile: A ComplianceProfile instance to add.

        Note:
            If a profile with the same name already exists, it will be replaced
            in its original position.
        """
        self._profiles[profile.name] = profile
        logger.info(f"Loaded compliance profile: {profile.name}")

    def unload_profile(self, profile_name: str) -> bool:
        """
        Remove a compliance profile from the engine.

        Returns:
            True if profile was removed, False if not found.
        """
        if profile_name in self._profiles:
            del self._profiles[profile_name]
            logger.info(f"Unloaded compliance profile: {profile_name}")
            return True
        return False

    def list_profiles(self) -> list[str]:
        """Return a list of loaded profile names."""
        return list(self._profiles.keys())

    def list_rules(self) -> list[dict[str, str]]:
        """Return every active rule in the order it is applied."""
        return [
            {
                "profile": profile.name,
                "name": pattern.name,
                "description": pattern.description,
            }
            for profile in self._profiles.values()
            for pattern in profile.get_patterns()
        ]

    def redact(self, text: str) -> tuple[str, bool]:
        """
        Redact sensitive data from the given text.

        Args:
            text: The input text to sanitize.

        Returns:
            A tuple of (redacted_text, was_redacted):
            - redacted_text: The sanitized text
            - was_redacted: True if the output differs from the input,
              line-ending normalization included

        Example:
            safe, redacted = engine.redact("password: Sup3rSecret!")
            # safe: "password=[REDACTED]"
            # redacted: True
        """
        result = self.redact_with_report(text)
        return result.text, result.changed

    def redact_with_report(self, text: str) -> RedactionResult:
        """
        Run the full pipeline and report what it did.

        Empty, whitespace-only and None input come back unchanged.
        """
        if not text or not text.strip():
            return RedactionResult(
                text=text,
                changed=False,
                original_length=len(text) if text else 0,
            )

        original_length = len(text)
        redacted, rules_applied = self._apply_rules(normalize_line_endings(text))

        redacted, frames_omitted = cap_stack_frames(redacted, self.max_stack_frames)

        truncated = len(redacted) > self.max_length
        if truncated:
            redacted = self._cap_length(redacted, original_length)

        changed = redacted != text
        logger.debug(
            f"Redaction complete: rules={rules_applied} frames_omitted={frames_omitted} "
            f"truncated={truncated} length={original_length}->{len(redacted)}"
        )

        return RedactionResult(
            text=redacted,
            changed=changed,
            original_length=original_length,
            rules_applied=tuple(rules_applied),
            frames_omitted=frames_omitted,
            truncated=truncated,
        )

    def _apply_rules(self, text: str) -> tuple[str, list[str]]:
        """Run every loaded pattern in order, returning the text and the rules that changed it."""
        rules_applied = []
        for profile in self._profiles.values():
            for pattern in profile.get_patterns():
                try:
                    rewritten = pattern.apply(text)
                except Exception as e:
                    logger.warning(f"Pattern '{pattern.name}' error: {e}")
                    continue
                if rewritten != text:
                    rules_applied.append(pattern.name)
                    text = rewritten
        return text, rules_applied

    def _cap_length(self, text: str, original_length: int) -> str:
        """
        Cut text so that it fits max_length together with the truncation marker.

        The cut lands on the last line break that fits, so no rule sees half
        a token on the next pass. A single oversized line is cut between
        words instead, backing off until the rules leave the kept part alone.
        """
        marker = TRUNCATION_MARKER.format(length=original_length)
        limit = max(self.max_length - len(marker), 0)

        end = text.rfind("\n", 0, limit + 1)
        if end > 0:
            body = text[:end]
        else:
            body = self._cut_between_words(text, limit)

        # An empty body must not leave the marker's leading newline behind
        return (body.rstrip() + marker).lstrip()

    def _cut_between_words(self, text: str, limit: int) -> str:
        end = limit + 1
        while True:
            end = max(text.rfind(" ", 0, end), text.rfind("\t", 0, end))
            if end <= 0:
                # No usable word boundary
                return text[:limit]
            body = text[:end].rstrip()
            if self._apply_rules(body)[0] == body:
                return body

    def redact_batch(self, texts: list[str]) -> tuple[list[str], bool]:
        """
        Redact sensitive data from multiple texts.

        Returns:
            A tuple of (redacted_texts, any_redacted):
            - redacted_texts: List of sanitized texts
            - any_redacted: True if ANY text had redaction
        """
        results = []
        any_redacted = False

        for text in texts:
            redacted_text, was_redacted = self.redact(text)
            results.append(redacted_text)
            if was_redacted:
                any_redacted = True

        return results, any_redacted


# Process-wide engine, built once from the environment
_default_engine: Optional[RedactionEngine] = None


def get_default_engine() -> RedactionEngine:
    """
    Get the default RedactionEngine instance.

    Built on first use from ScrubberConfig.from_env(). For more control,
    instantiate RedactionEngine directly.
    """
    global _default_engine
    if _default_engine is None:
        _default_engine = RedactionEngine.from_config(ScrubberConfig.from_env())
    return _default_engine


def reset_default_engine() -> None:
    """Drop the cached default engine so the next call rebuilds it."""
    global _default_engine
    _default_engine = None


def redact(text: str) -> tuple[str, bool]:
    """Redact text with the default engine."""
    return get_default_engine().redact(text)
