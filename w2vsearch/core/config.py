"""
Runtime configuration for the word2vec loader and similarity engine.
Values come from the environment (optionally a .env file).
"""

import os
from dotenv import load_dotenv

load_dotenv()

# Import-time snapshot; debug_enabled() re-reads the environment
DEBUG = os.getenv("DEBUG", "false").lower() == "true"

# Loader configuration
W2V_BUFFER_SIZE = int(os.getenv("W2V_BUFFER_SIZE", str(64 * 1024 * 1024)))  # 64 MiB
W2V_MAX_WORD_BYTES = int(os.getenv("W2V_MAX_WORD_BYTES", "1024"))
W2V_MIN_WORD_LENGTH = int(os.getenv("W2V_MIN_WORD_LENGTH", "2"))
W2V_UNICODE_ERRORS = os.getenv("W2V_UNICODE_ERRORS", "surrogateescape")  # lossless; strict|replace|ignore also accepted

# Search configuration
W2V_SEARCH_CHUNK_ROWS = int(os.getenv("W2V_SEARCH_CHUNK_ROWS", "65536"))
W2V_DEFAULT_TOP_K = int(os.getenv("W2V_DEFAULT_TOP_K", "40"))

# Logging
W2V_LOG_LEVEL = os.getenv("W2V_LOG_LEVEL", "INFO").upper()

# Largest byte count a single read() call accepts on Linux
MAX_SINGLE_READ = 0x7FFFF000

VALID_UNICODE_ERRORS = ["surrogateescape", "strict", "replace", "ignore", "backslashreplace"]
VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Version string
VERSION = "1.0.0"


def _int_env(name: str, default: int) -> int:
    return int(os.getenv(name, str(default)))


def debug_enabled():
    """Check if debug mode is enabled."""
    return os.getenv("DEBUG", "false").lower() == "true"


def get_buffer_size():
    """Get loader buffer size in bytes, capped at the single-read limit."""
    return min(_int_env("W2V_BUFFER_SIZE", W2V_BUFFER_SIZE), MAX_SINGLE_READ)


def get_max_word_bytes():
    """Get the longest word token (in bytes) a record may carry."""
    return _int_env("W2V_MAX_WORD_BYTES", W2V_MAX_WORD_BYTES)


def get_min_word_length():
    """Get the minimum accepted word length."""
    return _int_env("W2V_MIN_WORD_LENGTH", W2V_MIN_WORD_LENGTH)


def get_unicode_errors():
    """Get the UTF-8 decode error policy for word tokens."""
    return os.getenv("W2V_UNICODE_ERRORS", W2V_UNICODE_ERRORS)


def get_search_chunk_rows():
    """Get number of table rows scored per block during a search."""
    return _int_env("W2V_SEARCH_CHUNK_ROWS", W2V_SEARCH_CHUNK_ROWS)


def get_default_top_k():
    """Get default number of hits for the command-line tools."""
    return _int_env("W2V_DEFAULT_TOP_K", W2V_DEFAULT_TOP_K)


def get_log_level():
    """Get the log level name; DEBUG=true forces DEBUG."""
    if debug_enabled():
        return "DEBUG"
    return os.getenv("W2V_LOG_LEVEL", W2V_LOG_LEVEL).upper()


def validate_config():
    """Validate loader and search configuration and return any issues."""
    issues = []

    try:
        buffer_size = _int_env("W2V_BUFFER_SIZE", W2V_BUFFER_SIZE)
        if buffer_size < 1:
            issues.append("W2V_BUFFER_SIZE must be >= 1")
    except ValueError:
        issues.append(f"Invalid W2V_BUFFER_SIZE: {os.getenv('W2V_BUFFER_SIZE')}")

    try:
        if get_max_word_bytes() < 1:
            issues.append("W2V_MAX_WORD_BYTES must be >= 1")
    except ValueError:
        issues.append(f"Invalid W2V_MAX_WORD_BYTES: {os.getenv('W2V_MAX_WORD_BYTES')}")

    try:
        if get_min_word_length() < 1:
            issues.append("W2V_MIN_WORD_LENGTH must be >= 1")
    except ValueError:
        issues.append(f"Invalid W2V_MIN_WORD_LENGTH: {os.getenv('W2V_MIN_WORD_LENGTH')}")

    try:
        if get_search_chunk_rows() < 1:
            issues.append("W2V_SEARCH_CHUNK_ROWS must be >= 1")
    except ValueError:
        issues.append(f"Invalid W2V_SEARCH_CHUNK_ROWS: {os.getenv('W2V_SEARCH_CHUNK_ROWS')}")

    try:
        if get_default_top_k() < 1:
            issues.append("W2V_DEFAULT_TOP_K must be >= 1")
    except ValueError:
        issues.append(f"Invalid W2V_DEFAULT_TOP_K: {os.getenv('W2V_DEFAULT_TOP_K')}")

    if get_unicode_errors() not in VALID_UNICODE_ERRORS:
        issues.append(f"Invalid W2V_UNICODE_ERRORS: {get_unicode_errors()}")

    if get_log_level() not in VALID_LOG_LEVELS:
        issues.append(f"Invalid W2V_LOG_LEVEL: {get_log_level()}")

    return issues
