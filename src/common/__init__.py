"""Helpers shared across cargo-backup modules."""
