"""Fluent HTTP request construction on top of requests."""
