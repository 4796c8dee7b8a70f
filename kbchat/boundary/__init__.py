"""
Boundary layer for external system integrations.

Handles all interactions with external systems (PostgreSQL, pgvector,
embedding and chat model providers).
"""
