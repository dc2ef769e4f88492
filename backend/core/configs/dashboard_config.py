import os
from dotenv import load_dotenv
load_dotenv()

DATA_API_BASE_URL=os.getenv("DATA_API_BASE_URL", "http://localhost:5000/api")
DATA_API_TOKEN=os.getenv("DATA_API_TOKEN")
DATA_API_TIMEOUT=float(os.getenv("DATA_API_TIMEOUT", "10.0"))

STATS_PATH=os.getenv("STATS_PATH", "/stats")
FORECAST_PATH=os.getenv("FORECAST_PATH", "/forecast")
LOGS_PATH=os.getenv("LOGS_PATH", "/logs")

FRONTEND_ORIGINS=tuple(
    origin.strip()
    for origin in os.getenv("FRONTEND_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000").split(",")
    if origin.strip()
)
