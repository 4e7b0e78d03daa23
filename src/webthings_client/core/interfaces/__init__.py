"""Core interfaces.

Protocol contracts implemented by concrete adapters; the core depends on
these abstractions only.
"""

from webthings_client.core.interfaces.gateway import ReachabilityProbe, ThingsSource

__all__ = ["ReachabilityProbe", "ThingsSource"]
