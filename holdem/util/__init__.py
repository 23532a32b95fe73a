"""Utility helpers shared across the hold'em engine."""
