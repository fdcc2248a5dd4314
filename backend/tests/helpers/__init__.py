"""Shared helpers for API-level tests."""
