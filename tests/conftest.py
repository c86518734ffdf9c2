"""
Pytest configuration and shared fixtures for Exception Log Scrubber tests.

Clears SCRUBBER_* variables and cached engines around every test so
configuration never leaks between tests.
"""

import os
import sys

import pytest

# Add parent directory to path for server imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

SCRUBBER_ENV_VARS = [
    "SCRUBBER_MAX_LENGTH",
    "SCRUBBER_MAX_STACK_FRAMES",
    "SCRUBBER_NAME_DENYLIST_FILE",
    "SCRUBBER_EXTRA_PROFILES",
    "SCRUBBER_LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_scrubber_env(monkeypatch):
    """
    Remove scrubber settings from the environment and drop cached engines.
    This runs automatically before each test.
    """
    for name in SCRUBBER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)

    from log_scrubber import engine as engine_module
    engine_module.reset_default_engine()
    if "server" in sys.modules:
        sys.modules["server"]._engine = None

    yield

    engine_module.reset_default_engine()
    if "server" in sys.modules:
        sys.modules["server"]._engine = None


@pytest.fixture
def engine():
    """Return an engine with only the default exception log profile."""
    from log_scrubber import RedactionEngine
    return RedactionEngine()


@pytest.fixture
def sample_exception_log():
    """A .NET style exception log with a mix of sensitive values."""
    return (
        "2024-03-05T14:22:31Z ERROR Unhandled exception for user=jdoe (jane.doe@example.com)\r\n"
        "System.NullReferenceException: Object reference not set to an instance of an object.\r\n"
        "   at Orders.Api.Handler.Run() in C:\\build\\src\\Handler.cs:line 42\r\n"
        "   at Orders.Api.Program.Main() in /src/Program.cs:line 7\r\n"
        "Request from 10.0.0.15 to https://api.example.com/orders failed\r\n"
        "Author: John Smith\r\n"
    )


@pytest.fixture
def frame_lines():
    """Build n stack frame lines with distinct method names."""
    def build(n, prefix="Step"):
        return [f"at App.Worker.{prefix}{i}()" for i in range(1, n + 1)]
    return build
