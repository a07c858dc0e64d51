"""
Boundary layer for external system integrations.

Handles all interactions with external capability providers and APIs.
Provides adapters and clients behind the interfaces the core depends on.
"""
