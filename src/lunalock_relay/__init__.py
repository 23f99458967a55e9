from __future__ import annotations

from dotenv import load_dotenv

# Pick up TWILIO_* and friends from a local .env during development.
load_dotenv()

__version__ = "0.1.0"
