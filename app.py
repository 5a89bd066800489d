"""
Application entry point for the cart store.

Run with ``uvicorn app:app``. Configuration comes from the environment or a
``.env`` file; the replica is selected during startup.
"""

import os
from dotenv import load_dotenv

from cartstore.main import create_app
from cartstore.utils.logger import setup_logging

# Load environment variables
load_dotenv()

setup_logging(
    log_level_name=os.getenv("LOG_LEVEL", "INFO"),
    debug_mode=os.getenv("DEBUG", "False").lower() == "true"
)

app = create_app()
