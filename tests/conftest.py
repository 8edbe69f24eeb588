"""conftest.py
Add command line parsing and shared fixtures to pytest.
"""

import os

import pytest
from dotenv import load_dotenv

from career_gateway.config import GatewaySettings
from career_gateway.logging import LoggerFactory

load_dotenv()  # load .env

# --------------------------------------------------------------
# SETUP TEST LOGGING
# --------------------------------------------------------------

# Integrate logger with pytest
logger = LoggerFactory().get_logger(
    name="pytest_logger",
    logger_type="pytest",
    console=True
)
current_module = None

@pytest.hookimpl(tryfirst=True)
def pytest_sessionstart(session):
    """Session start header."""
    logger.info("==== PYTEST SESSION START ====")

@pytest.hookimpl(tryfirst=True)
def pytest_runtest_logstart(nodeid, location):
    """Called at the start of each test."""
    global current_module
    module_name = location[0]
    if module_name != current_module:
        current_module = module_name
        logger.info(f"\n---- Test module: {current_module} ----")

@pytest.hookimpl(tryfirst=True)
def pytest_runtest_logreport(report):
    """Called at the end of each test phase (setup/call/teardown)."""
    if report.when != "call":
        return

    status = report.outcome.upper()  # PASSED / FAILED / SKIPPED
    if status == "PASSED":
        logger.info(f"PASSED: {report.nodeid}")
    elif status == "FAILED":
        logger.error(f"FAILED: {report.nodeid}\n{report.longreprtext}")
    elif status == "SKIPPED":
        logger.warning(f"SKIPPED: {report.nodeid}\n{report.longreprtext}")

@pytest.hookimpl(tryfirst=True)
def pytest_sessionfinish(session, exitstatus):
    """Session finish footer."""
    logger.info(f"==== PYTEST SESSION END: exitstatus={exitstatus} ====")


# --------------------------------------------------------------
# SETUP RUN ARGUMENT PARSING
# --------------------------------------------------------------
def pytest_addoption(parser):
    """
    Register a command-line option for selecting the LLM test mode.

    Example usage:
        # Run tests against a mocked AI gateway (default)
        pytest

        # Also run the tests that call the real AI gateway
        pytest --llm-mode=live
    """
    parser.addoption(
        "--llm-mode",
        action="store",
        default="mock_only",
        choices=["mock_only", "live"],
        help=(
            "Set the LLM test mode for pytest. Options:\n"
            "  'mock_only' (default): Fake every AI gateway call with httpx.MockTransport.\n"
            "  'live': Also run tests that make real AI gateway calls."
        ),
    )

@pytest.fixture(scope="session")
def LLM_TEST_MODE(request):
    """
    Sets LLM test mode detected in pytest_addoption to LLM_TEST_MODE
    fixture variable.

    Returns:
        str: One of 'mock_only', 'live'.
    """
    return request.config.getoption("--llm-mode")


# --------------------------------------------------------------
# SETTINGS FIXTURES
# --------------------------------------------------------------
@pytest.fixture
def gateway_settings():
    """Configured settings pointing at a fake gateway URL (never contacted)."""
    return GatewaySettings(
        api_key="test-key",
        gateway_url="https://gateway.test/v1/chat/completions",
        model="test/model",
        request_timeout_s=5.0,
    )

@pytest.fixture
def unconfigured_settings():
    """Settings with no credential."""
    return GatewaySettings(api_key=None)

@pytest.fixture
def live_settings(LLM_TEST_MODE):
    """Real settings from the environment; skips unless running in live mode with a key."""
    if LLM_TEST_MODE != "live":
        pytest.skip("Live AI gateway tests only run with --llm-mode=live")
    settings = GatewaySettings.from_env()
    if not settings.is_configured:
        pytest.skip("AI_GATEWAY_API_KEY not defined in .env")
    return settings

@pytest.fixture
def clean_gateway_env(monkeypatch):
    """Remove every AI gateway variable so `GatewaySettings.from_env()` sees defaults."""
    for name in ("AI_GATEWAY_API_KEY", "AI_GATEWAY_URL", "AI_GATEWAY_MODEL", "AI_GATEWAY_TIMEOUT_S"):
        monkeypatch.delenv(name, raising=False)
    # A local .env must not refill the deleted variables
    monkeypatch.setattr("career_gateway.config.load_dotenv", lambda *args, **kwargs: False)
    yield os.environ
