"""Core retry machinery: configuration, errors, logging and execution."""
