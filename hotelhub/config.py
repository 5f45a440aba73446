import os

from dotenv import load_dotenv

load_dotenv()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
DEBUG = LOG_LEVEL == "DEBUG"

DATABASE_URL = os.getenv("DATABASE_URL")
if not DATABASE_URL:
    raise ValueError("DATABASE_URL must be set in the environment")

SCHEMA = "hotelhub"

ALLOWED_ORIGINS_RAW = os.getenv("ALLOWED_ORIGINS")
if not ALLOWED_ORIGINS_RAW:
    raise ValueError("ALLOWED_ORIGINS must be set in the environment")

ALLOWED_ORIGINS: list[str] = [
    origin.strip() for origin in ALLOWED_ORIGINS_RAW.split(",")
]

# Payment gateway (optional at import; checked when a payment endpoint is hit)
STRIPE_SECRET_KEY = os.getenv("STRIPE_SECRET_KEY")

PAYMENT_SESSION_TTL_HOURS = int(os.getenv("PAYMENT_SESSION_TTL_HOURS", "24"))
PAYMENT_SESSION_PATH = os.getenv("PAYMENT_SESSION_PATH", ".payment_session.json")

# Voice agent
HOTEL_NAME = os.getenv("HOTEL_NAME", "HotelHub PMS")
VOICE_AGENT_ID = os.getenv("VOICE_AGENT_ID")
CHECK_IN_TIME = "14:00"
CHECK_OUT_TIME = "11:00"
