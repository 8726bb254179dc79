"""Shared helpers: canonical JSON, exit codes, deterministic build ids."""
