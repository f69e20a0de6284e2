"""
Syllabus Graph Server Entry Point

Run with: python main.py
Or with uvicorn: uvicorn app:app --reload
"""

import os

import uvicorn

from syllabus_graph.config import Config

if __name__ == "__main__":
    config = Config.from_env()

    # Use reload only in development
    is_dev = os.getenv("ENVIRONMENT", "development") == "development"

    uvicorn.run(
        "app:app",
        host=config.api.host,
        port=config.api.port,
        reload=is_dev,
        log_level=config.logging.level.lower(),
    )
