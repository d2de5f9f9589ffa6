"""Domain layer — entries, front matter, taxonomies, ordering.

This layer depends only on stdlib, pydantic, and the front-matter codecs.
It must never import from services, infrastructure, commands, or config.
"""
