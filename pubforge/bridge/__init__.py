"""Bridges to cryptographic backends."""
