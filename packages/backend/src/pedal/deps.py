"""Shared FastAPI dependencies — access to app-owned state.

Learn: create_app() builds the stores, registry and broadcaster and
parks them on app.state. Handlers never import them as globals; they
ask for them here, and tests swap them by building a fresh app.
"""

from fastapi import Request

from pedal.realtime.pubsub import EventPublisher
from pedal.realtime.registry import ConnectionRegistry
from pedal.store import Stores


def get_stores(request: Request) -> Stores:
    return request.app.state.stores


def get_registry(request: Request) -> ConnectionRegistry:
    return request.app.state.registry


def get_publisher(request: Request) -> EventPublisher:
    return request.app.state.publisher
