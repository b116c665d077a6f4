# Pytest configuration for slicer tests
"""
Shared test setup: project root on sys.path and optional .env loading.
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Load environment variables from .env file (SLICER_* settings overrides)
from dotenv import load_dotenv
env_path = project_root / '.env'
if env_path.exists():
    load_dotenv(env_path)
