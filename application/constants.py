"""Application-level constants."""

# CLI exit codes
EXIT_OK = 0
EXIT_IMPORT_ERRORS = 1
EXIT_MALFORMED_DOCUMENT = 2

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
