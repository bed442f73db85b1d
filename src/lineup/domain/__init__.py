"""Domain layer: categories, policies, builders, and entities.

This layer depends only on the stdlib.
It must never import from services, infrastructure, commands, or config.
"""
