"""Shared error, configuration and path helpers for dirlist."""
