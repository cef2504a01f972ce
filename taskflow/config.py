from pathlib import Path
import os

from dotenv import load_dotenv

# Load environment variables from the repo root and working directory .env (if present).
REPO_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(REPO_ROOT / ".env")
load_dotenv(Path.cwd() / ".env")

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./taskflow.db")

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3030"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FILE = os.getenv("LOG_FILE") or None

_cors_origins = os.getenv("CORS_ORIGINS", "http://localhost:3030")
CORS_ORIGINS = [origin.strip() for origin in _cors_origins.split(",") if origin.strip()]

# Used by the client side only.
API_URL = os.getenv("TASKFLOW_API_URL", f"http://localhost:{PORT}/tasks")
