"""
Exception Log Scrubber - MCP Server for sanitizing logs before LLM analysis

A local MCP (Model Context Protocol) server that scrubs exception logs and
chat prompts of PII, credentials and environment details so an agent can
forward them to a hosted chat-completion model (Azure OpenAI or similar).

Tools:
    - redact_exception_log: Sanitize one log blob and report what changed
    - redact_log_batch: Sanitize several log entries at once
    - list_redaction_rules: Show the loaded profiles and rule order

Safety Constraints:
    - Output is capped at SCRUBBER_MAX_LENGTH characters (default 20000)
    - Stack traces keep at most SCRUBBER_MAX_STACK_FRAMES frames per run
    - Batches are limited to 50 entries
"""

import logging
import sys
from typing import Any, Optional

from dotenv import load_dotenv
from mcp.server.fastmcp import FastMCP

from log_scrubber import RedactionEngine, ScrubberConfig

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

# Initialize MCP server
mcp = FastMCP(
    "exception-log-scrubber",
    instructions="MCP Server that redacts sensitive data from exception logs before LLM analysis"
)

# Safety constants
MAX_BATCH_SIZE = 50

_engine: Optional[RedactionEngine] = None


def get_engine() -> RedactionEngine:
    """Create (once) and return the RedactionEngine configured from the environment."""
    global _engine
    if _engine is None:
        _engine = RedactionEngine.from_config(ScrubberConfig.from_env(dotenv=False))
    return _engine


@mcp.tool()
def redact_exception_log(log_text: str) -> dict[str, Any]:
    """
    Redact sensitive data from an exception log before sending it to an LLM.

    Emails, URLs, file paths, IP addresses, GUIDs, timestamps, memory
    addresses, credentials, card numbers, SSNs, phone numbers, session ids,
    JWTs, AWS keys, private keys and person names are replaced with
    [REDACTED_*] placeholders. Long stack traces are shortened and the
    output is capped in length.

    Args:
        log_text: The raw exception log or prompt text.

    Returns:
        A dictionary containing:
        - status: "success" or "error"
        - redacted_text: The sanitized text
        - was_redacted: True if the text was modified
        - original_length: Character count of the input
        - redacted_length: Character count of the output
        - rules_applied: Names of the rules that matched, in order
        - frames_omitted: Stack frame lines replaced or dropped
        - truncated: True if the length cap was applied

    Example usage:
        redact_exception_log("System.NullReferenceException at C:\\src\\Api.cs:line 42")
    """
    if not isinstance(log_text, str):
        return {
            "status": "error",
            "message": f"log_text must be a string, got {type(log_text).__name__}"
        }

    try:
        result = get_engine().redact_with_report(log_text)

        return {
            "status": "success",
            "redacted_text": result.text,
            "was_redacted": result.changed,
            "original_length": result.original_length,
            "redacted_length": len(result.text),
            "rules_applied": list(result.rules_applied),
            "frames_omitted": result.frames_omitted,
            "truncated": result.truncated
        }

    except Exception as e:
        logger.exception("Redaction failed")
        return {
            "status": "error",
            "message": f"Unexpected error: {str(e)}"
        }


@mcp.tool()
def redact_log_batch(log_entries: list[str]) -> dict[str, Any]:
    """
    Redact sensitive data from several log entries.

    Args:
        log_entries: List of log messages (max 50).

    Returns:
        A dictionary containing:
        - status: "success" or "error"
        - results: Sanitized entries, in input order
        - count: Number of entries processed
        - any_redacted: True if any entry was modified
    """
    if not isinstance(log_entries, list):
        return {
            "status": "error",
            "message": f"log_entries must be a list, got {type(log_entries).__name__}"
        }

    if len(log_entries) > MAX_BATCH_SIZE:
        return {
            "status": "error",
            "message": f"Too many entries ({len(log_entries)}); maximum is {MAX_BATCH_SIZE}"
        }

    bad = [i for i, entry in enumerate(log_entries) if not isinstance(entry, str)]
    if bad:
        return {
            "status": "error",
            "message": f"Entries must be strings; invalid positions: {bad}"
        }

    try:
        results, any_redacted = get_engine().redact_batch(log_entries)

        return {
            "status": "success",
            "results": results,
            "count": len(results),
            "any_redacted": any_redacted
        }

    except Exception as e:
        logger.exception("Batch redaction failed")
        return {
            "status": "error",
            "message": f"Unexpected error: {str(e)}"
        }


@mcp.tool()
def list_redaction_rules() -> dict[str, Any]:
    """
    List the loaded redaction profiles and their rules in application order.

    Returns:
        A dictionary containing:
        - status: "success" or "error"
        - profiles: Loaded profile names
        - rules: List of {profile, name, description}
        - max_length: Output length cap
        - max_stack_frames: Frames kept per stack trace run
    """
    try:
        engine = get_engine()

        return {
            "status": "success",
            "profiles": engine.list_profiles(),
            "rules": engine.list_rules(),
            "max_length": engine.max_length,
            "max_stack_frames": engine.max_stack_frames
        }

    except Exception as e:
        return {
            "status": "error",
            "message": f"Unexpected error: {str(e)}"
        }


if __name__ == "__main__":
    # stdout carries the stdio transport, so logs go to stderr
    logging.basicConfig(
        level=ScrubberConfig.from_env(dotenv=False).log_level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    # Run the MCP server using stdio transport
    mcp.run()
