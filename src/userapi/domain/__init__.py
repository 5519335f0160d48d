"""Domain layer — user models, date rules, pagination arithmetic, error kinds.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, api, or commands.
"""
