"""Endpoint request helpers (internal)."""
