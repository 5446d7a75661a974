#!/usr/bin/env python3
"""Check connectivity to the geocoding and routing providers."""

import sys
from pathlib import Path

project_root = Path(__file__).parent
sys.path.insert(0, str(project_root / "src"))

from freight_quote.config import settings
from freight_quote.errors import ProviderError, RoutingUnavailable
from freight_quote.services.geocoding import NominatimClient
from freight_quote.services.routing import OSRMClient


def main():
    print("=" * 60)
    print("Provider Connection Test")
    print("=" * 60)
    print()

    print(f"1. Geocoding via {settings.nominatim_base_url}...")
    try:
        match = NominatimClient().search("M5H 2N2, Toronto, ON, Canada")
    except ProviderError as e:
        print(f"   [ERROR] {e}")
        return 1
    if match is None:
        print("   [ERROR] No match for the Toronto test query")
        return 1
    print(f"   [OK] {match.display_name} ({match.latitude:.4f}, {match.longitude:.4f})")
    print()

    print(f"2. Routing via {settings.osrm_base_url} ({settings.osrm_profile})...")
    try:
        meters = OSRMClient().route_distance((43.6511, -79.3839), (49.2827, -123.1207))
    except RoutingUnavailable as e:
        print(f"   [ERROR] {e}")
        print("   Quotes will use great-circle distance until routing is reachable.")
        return 1
    if meters is None:
        print("   [ERROR] OSRM returned no route for Toronto -> Vancouver")
        return 1
    print(f"   [OK] Toronto -> Vancouver: {meters / 1000:.0f} km")
    print()

    print("=" * 60)
    print("[SUCCESS] Both providers are reachable")
    print("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
