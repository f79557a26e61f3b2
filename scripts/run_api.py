#!/usr/bin/env python3
"""Run the FastAPI server for the stories backend."""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import uvicorn

from webstories.api.config import HOST, LOG_JSON, LOG_LEVEL, PORT
from webstories.api.logging import configure_logging


def main():
    """Run the API server."""
    configure_logging(json_format=LOG_JSON, level=LOG_LEVEL)
    uvicorn.run(
        "webstories.api.main:app",
        host=HOST,
        port=PORT,
        reload="--reload" in sys.argv[1:],
        log_config=None,  # keep the handlers installed by configure_logging
    )


if __name__ == "__main__":
    main()
