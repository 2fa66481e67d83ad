"""Logging setup and the failed-append error log."""
