"""Domain layer — square model, palette, and spiral ordering.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
