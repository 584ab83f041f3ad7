#!/usr/bin/env python3
"""Run the accounts backend with uvicorn."""
from __future__ import annotations

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from uvicorn import run

from app.core.config import get_settings
from app.main import app


if __name__ == "__main__":
    port = int(sys.argv[1]) if len(sys.argv) > 1 else 8000
    run(app, host="0.0.0.0", port=port, log_level=get_settings().log_level.lower())
