"""Tiergate core state containers."""
