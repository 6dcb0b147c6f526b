"""Shared models and utilities."""
