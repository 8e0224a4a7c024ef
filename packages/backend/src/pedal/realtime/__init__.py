"""Real-time infrastructure — connection registry + broadcast fan-out.

Learn: Events flow through two paths into the same broadcaster:
1. WebSocket client → message loop → broadcast to every peer
2. HTTP handler → EventPublisher → broadcast (after the response)

The registry tracks who is connected; the broadcaster delivers and
prunes connections that fail.
"""
