"""
TutorVerse Test Suite

Unit tests for all modules. LLM calls are patched at the import site of
each module, so no API key is needed.
Run tests with: pytest tests/
Run the live-API tests with: pytest -m integration tests/
"""

import os
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Keep unit tests from sending traces
os.environ["LANGFUSE_ENABLED"] = "false"
os.environ["LANGFUSE_TRACING_ENABLED"] = "false"
