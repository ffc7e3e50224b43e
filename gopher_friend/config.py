"""
Process-wide configuration for the gopher-friend CLI.

The base URL is compiled in and cannot be overridden. Logging settings are
read from the environment, with a `.env` file in the working directory
loaded first.
"""
import os
from dotenv import find_dotenv, load_dotenv

load_dotenv(find_dotenv(usecwd=True))

# --- Remote Configuration ---
BASE_URL = "https://github.com/scraly/gophers/raw/main"
GOPHER_FILE_EXTENSION = ".png"
# --- End Remote Configuration ---

# --- Logging Configuration ---
LOG_LEVEL = os.getenv("GOPHER_FRIEND_LOG_LEVEL", "WARNING").upper()
LOG_FORMAT = os.getenv("GOPHER_FRIEND_LOG_FORMAT", "console").lower()
# --- End Logging Configuration ---

PROG_NAME = "gopher-friend"
VERSION = "0.1.0"

# Exit status for infrastructure failures (network or filesystem).
EXIT_FAILURE = 255
