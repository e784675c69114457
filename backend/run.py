#!/usr/bin/env python3
"""
Start the flyer generator server.
"""

import logging

import uvicorn
from flyerkit.config import get_settings

settings = get_settings()

if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger = logging.getLogger("flyerkit")
    logger.info("=" * 50)
    logger.info("Flyer Generator")
    logger.info("=" * 50)
    logger.info(f"Starting server at http://{settings.host}:{settings.port}")
    logger.info(f"API Docs: http://localhost:{settings.port}/docs")

    uvicorn.run(
        "flyerkit.main:app",
        host=settings.host,
        port=settings.port,
        reload=True
    )
