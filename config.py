import os
from dotenv import load_dotenv

load_dotenv()


# ─── Bot Settings ──────────────────────────────────────────
BOT_TOKEN: str = os.getenv("TELEGRAM_BOT_TOKEN", "")

# ─── Conversion Settings ───────────────────────────────────
DEFAULT_MEDIA_TYPE: str = os.getenv("DEFAULT_MEDIA_TYPE", "ppt")

# ─── Preview Settings ──────────────────────────────────────
SEND_MEDIA_PREVIEW: bool = os.getenv("SEND_MEDIA_PREVIEW", "1").lower() not in ("0", "false", "no", "")
MEDIA_PREVIEW_TIMEOUT: int = int(os.getenv("MEDIA_PREVIEW_TIMEOUT", "60"))  # seconds

# ─── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE: str = os.getenv("LOG_FILE", "bot.log")

# ─── Webhook / Render Deployment ───────────────────────────
WEBHOOK_URL: str = os.getenv("WEBHOOK_URL", "")
PORT: int = int(os.getenv("PORT", "8443"))
WEBHOOK_PATH: str = os.getenv("WEBHOOK_PATH", "/webhook")
