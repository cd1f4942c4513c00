"""Configuration and constants for the realty API."""

import os

from dotenv import load_dotenv

load_dotenv()

SUPABASE_URL = os.environ.get("SUPABASE_URL", "")
SUPABASE_ANON_KEY = os.environ.get("SUPABASE_ANON_KEY", "")
SUPABASE_SERVICE_ROLE_KEY = os.environ.get("SUPABASE_SERVICE_ROLE_KEY", "")

HOST = os.environ.get("HOST", "0.0.0.0")
PORT = int(os.environ.get("PORT", "3000"))

# Comma-separated; the production frontend is the default
CORS_ORIGINS = [
    o.strip()
    for o in os.environ.get("CORS_ORIGINS", "https://elite-real.vercel.app").split(",")
    if o.strip()
]

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

PROPERTIES_TABLE = "properties"
BOOKINGS_TABLE = "bookings"
REALTORS_TABLE = "realtors"

PROPERTY_FIELDS = ("title", "location", "price", "bedrooms", "bathrooms", "imageUrl", "description")
BOOKING_FIELDS = ("property_id", "customer_name", "customer_email", "booking_date", "booking_time")
