"""Domain layer: outcomes, error types, and the session lifecycle.

This layer depends only on stdlib and pydantic.
It must never import from services, config, output, or commands.
"""
