"""
Social feed client.

Layers:
- domain/          → Entities, value objects, ports, exceptions (stdlib only)
- application/     → Session, feed synchronizer, command/query handlers
- infrastructure/  → HTTP implementations of the domain ports
- presentation/    → FeedClient facade called by the UI layer
- setup/ioc/       → Dishka container wiring
"""

__version__ = "0.3.0"
