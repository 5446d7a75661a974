"""Distance resolution services."""

from .distance import DistanceResolver
from .osrm_client import OSRMClient, RoutingProvider, check_health

__all__ = ["DistanceResolver", "OSRMClient", "RoutingProvider", "check_health"]
