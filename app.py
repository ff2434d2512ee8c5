#!/usr/bin/env python3
"""
Flask REST API for the CalmaLink chat service.

Uses environment variables for configuration (see .env.example).
"""
import os
import sys
from pathlib import Path

# Add service to path (src/ is in the same directory)
sys.path.insert(0, str(Path(__file__).parent / "src"))

from calmalink.server import create_app

app = create_app()


if __name__ == "__main__":
    port = int(os.getenv("PORT", 7860))
    # Disable debug mode for production
    app.run(host="0.0.0.0", port=port, debug=False)
