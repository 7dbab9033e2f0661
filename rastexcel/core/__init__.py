"""Core runtime pieces: errors, logging and pass orchestration."""
