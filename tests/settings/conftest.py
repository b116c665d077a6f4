"""
Pytest fixtures for settings tests.
"""

import sys
import pytest
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from slicer.settings import SettingsService


@pytest.fixture
def service():
    """Settings service that ignores the real environment."""
    return SettingsService(environ={})


@pytest.fixture
def env_service():
    """Settings service with a few SLICER_* overrides."""
    return SettingsService(environ={
        'SLICER_SEARCH_MIN_SCORE': '0.5',
        'SLICER_SEARCH_MAX_RESULTS': '250',
        'SLICER_CROSS_FILTER_ENABLED': 'false',
        'SLICER_CROSS_FILTER_APPLY_MODE': 'deferred',
    })
