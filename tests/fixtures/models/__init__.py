"""Fixture models."""
