"""Pytest configuration and fixtures."""

from unittest.mock import patch

from fastapi.testclient import TestClient
import pytest

from app.main import create_app
from app.services.validator import ValidationRules

# ============================================================================
# Base Fixtures
# ============================================================================


@pytest.fixture
def client():
    """Create test client without authentication."""
    with patch("app.core.security.settings") as mock_settings:
        mock_settings.api_key = None
        app = create_app()
        yield TestClient(app)


@pytest.fixture
def client_with_auth():
    """Client with API key configured (no default headers)."""
    with patch("app.core.security.settings") as mock_settings:
        mock_settings.api_key = "test_secret_key_12345"
        app = create_app()
        yield TestClient(app)


@pytest.fixture
def rules():
    """Default validation thresholds, independent of the environment."""
    return ValidationRules()


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def sample_srt():
    """Sample SRT content with no issues."""
    return """1
00:00:01,000 --> 00:00:04,000
Hello world

2
00:00:05,000 --> 00:00:08,000
How are you?"""


@pytest.fixture
def overlapping_srt():
    """First cue ends after the second one starts."""
    return """1
00:00:01,000 --> 00:00:05,000
First subtitle

2
00:00:04,000 --> 00:00:07,000
Second subtitle"""


@pytest.fixture
def mixed_srt():
    """Valid cues interleaved with malformed blocks."""
    return """1
00:00:01,000 --> 00:00:03,000
Valid subtitle

garbage
no arrow here

3
00:00:05,000 --> 00:00:07,000
<i>Styled</i> [music] text

lonely line

5
00:00:xx,000 --> 00:00:10,000
Broken timestamp"""


@pytest.fixture
def annotated_srt():
    """Cues with hearing-impaired annotations and styling tags."""
    return """1
00:00:01,000 --> 00:00:03,000
This line has brackets [note] and (aside) content

2
00:00:04,000 --> 00:00:06,000
<i>Italic</i> and <b>bold</b>"""
