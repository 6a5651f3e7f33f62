"""Shared domain building blocks and the error taxonomy."""
