"""
Tests for the MCP server tools.

Tests cover:
- redact_exception_log output shape and content
- Batch limits and input validation
- Rule listing
- Configuration errors surfaced as error results
"""

from server import (
    MAX_BATCH_SIZE,
    get_engine,
    list_redaction_rules,
    redact_exception_log,
    redact_log_batch,
)


class TestRedactExceptionLog:
    """Test suite for redact_exception_log tool."""

    def test_redacts_log(self, sample_exception_log):
        """Should return the redacted log and its report."""
        result = redact_exception_log(sample_exception_log)

        assert result["status"] == "success"
        assert result["was_redacted"] is True
        assert "jane.doe@example.com" not in result["redacted_text"]
        assert result["original_length"] == len(sample_exception_log)
        assert result["redacted_length"] == len(result["redacted_text"])
        assert "email" in result["rules_applied"]
        assert result["frames_omitted"] == 0
        assert result["truncated"] is False

    def test_clean_text(self):
        """Should report clean text as unchanged."""
        result = redact_exception_log("Service started successfully")

        assert result["status"] == "success"
        assert result["redacted_text"] == "Service started successfully"
        assert result["was_redacted"] is False
        assert result["rules_applied"] == []

    def test_long_trace_is_capped(self, frame_lines):
        """Should report omitted frames."""
        result = redact_exception_log("\n".join(frame_lines(14)))

        assert result["status"] == "success"
        assert result["frames_omitted"] == 4

    def test_rejects_non_string(self):
        """Should reject non-string input."""
        result = redact_exception_log(12345)

        assert result["status"] == "error"
        assert "must be a string" in result["message"]

    def test_uses_environment_limits(self, monkeypatch):
        """Should apply SCRUBBER_MAX_LENGTH."""
        monkeypatch.setenv("SCRUBBER_MAX_LENGTH", "200")

        result = redact_exception_log("x" * 1000)

        assert result["truncated"] is True
        assert result["redacted_length"] <= 200
        assert "original length 1000" in result["redacted_text"]

    def test_config_error_is_reported(self, monkeypatch):
        """Should return bad configuration as an error result."""
        monkeypatch.setenv("SCRUBBER_MAX_LENGTH", "lots")

        result = redact_exception_log("hello")

        assert result["status"] == "error"
        assert "SCRUBBER_MAX_LENGTH" in result["message"]


class TestRedactLogBatch:
    """Test suite for redact_log_batch tool."""

    def test_batch(self):
        """Should redact every entry in order."""
        result = redact_log_batch(["Email: test@example.com", "Normal message"])

        assert result["status"] == "success"
        assert result["count"] == 2
        assert result["any_redacted"] is True
        assert result["results"] == ["Email: [REDACTED_EMAIL]", "Normal message"]

    def test_enforces_batch_limit(self):
        """Should refuse more than MAX_BATCH_SIZE entries."""
        result = redact_log_batch(["entry"] * (MAX_BATCH_SIZE + 1))

        assert result["status"] == "error"
        assert "maximum is 50" in result["message"]

    def test_rejects_non_string_entries(self):
        """Should list the positions of non-string entries."""
        result = redact_log_batch(["ok", None, 3])

        assert result["status"] == "error"
        assert "[1, 2]" in result["message"]

    def test_empty_batch(self):
        """Should accept an empty batch."""
        result = redact_log_batch([])

        assert result == {"status": "success", "results": [], "count": 0, "any_redacted": False}

    def test_rejects_non_list(self):
        """Should reject a bare string."""
        result = redact_log_batch("just one entry")

        assert result["status"] == "error"
        assert "must be a list" in result["message"]


class TestListRedactionRules:
    """Test suite for list_redaction_rules tool."""

    def test_lists_default_rules(self):
        """Should list the default profile and limits."""
        result = list_redaction_rules()

        assert result["status"] == "success"
        assert result["profiles"] == ["exception_log"]
        assert result["rules"][0]["name"] == "email"
        assert result["rules"][-1]["name"] == "person_name"
        assert result["max_length"] == 20000
        assert result["max_stack_frames"] == 10

    def test_lists_optional_profiles(self, monkeypatch):
        """Should include optional profiles from the environment."""
        monkeypatch.setenv("SCRUBBER_EXTRA_PROFILES", "developer_tokens")

        result = list_redaction_rules()

        assert result["profiles"] == ["exception_log", "developer_tokens"]
        assert result["rules"][-1]["profile"] == "developer_tokens"

    def test_unknown_profile_is_reported(self, monkeypatch):
        """Should return an unknown profile as an error result."""
        monkeypatch.setenv("SCRUBBER_EXTRA_PROFILES", "nope")

        result = list_redaction_rules()

        assert result["status"] == "error"
        assert "Unknown profile 'nope'" in result["message"]

    def test_engine_is_cached(self):
        """Should build the engine once."""
        assert get_engine() is get_engine()
