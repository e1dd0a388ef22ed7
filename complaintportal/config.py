"""Portal configuration: ports, logging and MongoDB connection settings."""
import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env file from the project root
project_root = Path(__file__).parent.parent
env_file = project_root / ".env"
if env_file.exists():
    load_dotenv(env_file)

# Service Configuration
PORT = int(os.getenv("PORT", "8080"))
SERVICE_NAME = os.getenv("SERVICE_NAME", "portal")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR = Path(os.getenv("LOG_DIR", "logs"))

# MongoDB
MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017/complain")
MONGO_DB_NAME = os.getenv("MONGO_DB_NAME", "complaintsPortal")
MONGO_TIMEOUT_MS = int(os.getenv("MONGO_TIMEOUT_MS", "10000"))

# Use a single $push for the user's complaint list instead of read-modify-write
ATOMIC_COMPLAINT_APPEND = os.getenv("ATOMIC_COMPLAINT_APPEND", "false").lower() == "true"

SERVICE_PORTS = {
    "portal": PORT,
}


def get_service_url(service_name: str) -> str:
    """Get the full URL for a service."""
    port = SERVICE_PORTS.get(service_name)
    if not port:
        raise ValueError(f"Unknown service: {service_name}")
    return f"http://localhost:{port}"
