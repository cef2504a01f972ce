#!/usr/bin/env python
"""Script to run the TaskFlow API server."""
import uvicorn

from taskflow.config import HOST, LOG_FILE, LOG_LEVEL, PORT
from taskflow.logging_setup import setup_logging

if __name__ == "__main__":
    setup_logging(LOG_LEVEL, LOG_FILE)
    uvicorn.run(
        "taskflow.main:app",
        host=HOST,
        port=PORT,
        log_config=None,
    )
