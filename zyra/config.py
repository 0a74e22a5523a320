"""
Runtime configuration.

All settings come from environment variables and are read once at import.
"""

import os

# Supabase (service role key: row-level filters are applied by the API itself)
SUPABASE_URL = os.environ.get("SUPABASE_URL", "")
SUPABASE_SERVICE_ROLE_KEY = os.environ.get("SUPABASE_SERVICE_ROLE_KEY", "")

# Upstash Redis - realtime event streams
UPSTASH_REDIS_REST_URL = os.environ.get("UPSTASH_REDIS_REST_URL", "")
UPSTASH_REDIS_REST_TOKEN = os.environ.get("UPSTASH_REDIS_REST_TOKEN", "")

# Public URL of the storefront (used in order verification links)
WEBAPP_URL = os.environ.get("WEBAPP_URL", "https://zyra.app").rstrip("/")

# Comma-separated list of allowed CORS origins
CORS_ORIGINS = [
    origin.strip()
    for origin in os.environ.get("CORS_ORIGINS", "*").split(",")
    if origin.strip()
]

# Placeholder image for shops/products without artwork
PLACEHOLDER_IMAGE = "/placeholder.svg"

# Promised delivery window after an order is placed
DELIVERY_WINDOW_HOURS = 24

# Delivery is free for every order
DELIVERY_CHARGE = 0
