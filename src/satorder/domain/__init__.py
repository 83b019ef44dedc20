"""Domain layer — value objects and validation rules.

This layer depends only on stdlib and shapely.
It must never import from services, infrastructure, commands, api, or config.
"""
