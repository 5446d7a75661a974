#!/usr/bin/env python3
"""Helper script to check and create the .env file for the quote API."""

from pathlib import Path
import os

ENV_TEMPLATE = """# Providers
FQ_NOMINATIM_BASE_URL=https://nominatim.openstreetmap.org
FQ_NOMINATIM_USER_AGENT=FreightQuoteCalculator/1.0
FQ_OSRM_BASE_URL=https://router.project-osrm.org
FQ_ROUTING_TIMEOUT_SECONDS=5

# Pricing
FQ_BASE_RATE_PER_MILE=2.00
FQ_MINIMUM_QUOTE=100.00
FQ_WEIGHT_THRESHOLD_LB=10000
FQ_WEIGHT_SURCHARGE_PER_HUNDRED_LB=0.10
# Overrides merge with the defaults, e.g. {"reefer": 1.25}
# FQ_EQUIPMENT_MULTIPLIERS={"reefer": 1.25}

# Supabase (optional - quotes are stored under FQ_DATA_ROOT when unset)
# FQ_SUPABASE_URL=https://your-project-id.supabase.co
# FQ_SUPABASE_KEY=your-service-role-key-here
FQ_DATA_ROOT=./data
"""

CHECKED_VARIABLES = (
    "FQ_OSRM_BASE_URL",
    "FQ_NOMINATIM_BASE_URL",
    "FQ_BASE_RATE_PER_MILE",
    "FQ_MINIMUM_QUOTE",
    "FQ_SUPABASE_URL",
    "FQ_SUPABASE_KEY",
)


def _mask(name: str, value: str) -> str:
    if name.endswith("_KEY") and len(value) > 20:
        return value[:20] + "..." + value[-10:]
    return value


def main():
    project_root = Path(__file__).parent
    env_file = project_root / ".env"

    print("=" * 60)
    print("Quote API Environment Checker")
    print("=" * 60)
    print()

    if not env_file.exists():
        env_file.write_text(ENV_TEMPLATE, encoding="utf-8")
        print(f"Created template .env file at: {env_file}")
        print("Edit it and run this script again.")
        return

    print(f"Found .env file at: {env_file}")
    print()
    for name in CHECKED_VARIABLES:
        value = os.getenv(name)
        if value:
            print(f"  {name} (from environment): {_mask(name, value)}")
        else:
            print(f"  {name} not set in environment")
    print()

    print("Testing config loading...")
    try:
        import sys
        sys.path.insert(0, str(project_root / "src"))
        from freight_quote.config import settings
    except Exception as e:
        print(f"Error loading config: {e}")
        print("Make sure you're running this from the project root directory")
        return

    pricing = settings.pricing_config()
    print(f"  Base rate per mile: {pricing.base_rate_per_mile:.2f}")
    print(f"  Minimum quote: {pricing.minimum_quote:.2f}")
    print(f"  Weight threshold: {pricing.weight_threshold_lb:.0f} lb")
    for equipment, multiplier in sorted(pricing.equipment_multipliers.items()):
        print(f"  {equipment}: x{multiplier:.2f}")
    print(f"  Quote store: {'supabase' if settings.supabase_url and settings.supabase_key else settings.data_root}")


if __name__ == "__main__":
    main()
