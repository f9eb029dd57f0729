"""Domain layer — grid addressing, board model, commands, and the intent parser.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
