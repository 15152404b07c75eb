"""Shared test doubles for l10nresolver tests."""
