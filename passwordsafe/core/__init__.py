"""Core building blocks: Result types, error codes, errors, constants, settings."""
