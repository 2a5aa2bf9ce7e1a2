"""
Boundary layer for external system integrations.

Handles all interactions with external systems (database, object store,
analysis LLM). Provides adapters and clients for infrastructure dependencies.
"""
