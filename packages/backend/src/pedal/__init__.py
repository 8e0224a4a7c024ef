"""PEDAL — social backend for riders.

Accounts, posts, comments, reactions, a follow graph with a live feed,
and a WebSocket broadcast channel for real-time updates.
"""

__version__ = "2.0.0"
