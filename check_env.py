#!/usr/bin/env python3
"""Helper script to check and create the .env file for Supabase and weather provider configuration."""

from pathlib import Path
import os

ENV_TEMPLATE = """# Supabase Configuration (Required for quotes and trips)
# Get these from: https://supabase.com/dashboard → Your Project → Settings → API
TRAVELEX_SUPABASE_URL=https://your-project-id.supabase.co
TRAVELEX_SUPABASE_KEY=your-service-role-key-here
# Primary key of the company_settings row holding distance/duration rates
TRAVELEX_COMPANY_SETTINGS_ID=11111111-1111-1111-1111-111111111111

# API Configuration
TRAVELEX_API_PREFIX=/api
# TRAVELEX_FRONTEND_ALLOWED_ORIGINS - JSON array or comma-separated list
# TRAVELEX_LOG_LEVEL=INFO

# Weather (WeatherAPI.com key is optional; Open-Meteo needs no key)
TRAVELEX_WEATHER_API_KEY=
# TRAVELEX_WEATHER_TIMEOUT_SECONDS=10
# TRAVELEX_WEATHER_CACHE_TTL_SECONDS=900
"""

SECRET_VARIABLES = ("TRAVELEX_SUPABASE_KEY", "TRAVELEX_WEATHER_API_KEY")


def _mask(line: str) -> str:
    name, _, value = line.partition("=")
    value = value.strip()
    if name.strip() in SECRET_VARIABLES and len(value) > 20:
        return f"{name}={value[:20]}...{value[-10:]}"
    return line


def main():
    project_root = Path(__file__).parent
    env_file = project_root / ".env"

    print("=" * 60)
    print("TravelEx Environment Variables Checker")
    print("=" * 60)
    print()

    if not env_file.exists():
        print(f"❌ .env file NOT found at: {env_file}")
        print("Creating template .env file...")
        env_file.write_text(ENV_TEMPLATE, encoding="utf-8")
        print(f"✅ Created .env file at: {env_file}")
        print()
        print("⚠️  Please edit .env and add your Supabase credentials!")
        return

    print(f"✅ Found .env file at: {env_file}")
    print("-" * 60)
    for line in env_file.read_text(encoding="utf-8").splitlines():
        print(_mask(line))
    print("-" * 60)
    print()

    for name in ("TRAVELEX_SUPABASE_URL", "TRAVELEX_SUPABASE_KEY", "TRAVELEX_WEATHER_API_KEY"):
        value = os.getenv(name)
        if value:
            print(f"✅ {name} (from environment): {value[:20]}...")
        else:
            print(f"➖ {name} not set in environment (may still come from .env)")
    print()

    print("Testing config loading...")
    try:
        import sys
        sys.path.insert(0, str(project_root / "src"))
        from travelex.config import settings
    except Exception as e:
        print(f"❌ Error loading config: {e}")
        print("Make sure you're running this from the project root directory")
        return

    print(f"{'✅' if settings.supabase_url and settings.supabase_key else '❌'} Supabase configured")
    print(f"{'✅' if settings.weather_api_key else '➖'} WeatherAPI key configured (optional)")
    print(f"✅ Open-Meteo endpoint: {settings.open_meteo_base_url}")
    if not (settings.supabase_url and settings.supabase_key):
        print()
        print("Troubleshooting:")
        print("1. Make sure .env file exists in project root")
        print("2. Make sure variables start with TRAVELEX_ prefix")
        print("3. Restart backend after editing .env")


if __name__ == "__main__":
    main()
