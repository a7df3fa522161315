"""Global configuration — paths, env vars.

DEPLOYMENT:
  Copy .env.example → .env and fill in the values.
  To switch model providers, only the .env file needs to change — no code edits required.
"""

import os
from dotenv import load_dotenv

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))  # backend/
PROJECT_DIR = os.path.dirname(BASE_DIR)  # project root

# Load .env from project root (overrides any system env vars with same name)
load_dotenv(os.path.join(PROJECT_DIR, ".env"), override=True)

# ─── Environment ─────────────────────────────────────────────
ENVIRONMENT = os.environ.get("ENVIRONMENT", "development")
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# ─── Server ──────────────────────────────────────────────────
PORT = int(os.environ.get("PORT", 3001))

# ─── CORS ────────────────────────────────────────────────────
# Dev:  ALLOWED_ORIGINS=*
# Prod: ALLOWED_ORIGINS=https://yourdomain.com,https://www.yourdomain.com
_raw_origins = os.environ.get("ALLOWED_ORIGINS", "*")
ALLOWED_ORIGINS = ["*"] if _raw_origins.strip() == "*" else [
    o.strip() for o in _raw_origins.split(",") if o.strip()
]

# ─── Model providers ─────────────────────────────────────────
# doubao → Volcengine Ark, deepseek → DeepSeek, claude → Anthropic.
DEFAULT_PROVIDER = os.environ.get("DEFAULT_PROVIDER", "doubao")

VOLC_API_KEY = os.environ.get("VOLC_API_KEY", "")
VOLC_ENDPOINT = os.environ.get("VOLC_ENDPOINT", "")
VOLC_MODEL = os.environ.get("VOLC_MODEL", "")

DEEPSEEK_API_KEY = os.environ.get("DEEPSEEK_API_KEY", "")
DEEPSEEK_ENDPOINT = os.environ.get(
    "DEEPSEEK_ENDPOINT", "https://api.deepseek.com/v1/chat/completions"
)
DEEPSEEK_MODEL = os.environ.get("DEEPSEEK_MODEL", "")

ANTHROPIC_API_KEY = os.environ.get("ANTHROPIC_API_KEY", "")
ANTHROPIC_MODEL = os.environ.get("ANTHROPIC_MODEL", "claude-3-haiku-20240307")

# Low temperature keeps the JSON output stable across calls.
MODEL_TEMPERATURE = float(os.environ.get("MODEL_TEMPERATURE", 0.2))
MODEL_TIMEOUT_SECONDS = float(os.environ.get("MODEL_TIMEOUT_SECONDS", 30))
MODEL_MAX_TOKENS = int(os.environ.get("MODEL_MAX_TOKENS", 4000))
