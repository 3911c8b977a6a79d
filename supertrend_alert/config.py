import os
from dotenv import load_dotenv

load_dotenv()

def env(key: str, default: str | None = None) -> str | None:
    return os.getenv(key, default)

def env_list(key: str, default: str) -> list[str]:
    return [s.strip() for s in (env(key, default) or "").split(",") if s.strip()]

DATA_PROVIDER = (env("DATA_PROVIDER", "binance") or "binance").lower()
BINANCE_URL = env("BINANCE_URL", "https://testnet.binance.vision/api/v3")
HTTP_TIMEOUT_SEC = float(env("HTTP_TIMEOUT_SEC", "15"))

INTERVALS = env_list("INTERVALS", "1m,5m,15m,30m,1h,4h")
CUSTOM_SYMBOLS = env_list("CUSTOM_SYMBOLS", "BTCUSDT,ETHUSDT,KDAUSDT,SOLUSDT,OMUSDT")
QUOTE_ASSET = env("QUOTE_ASSET", "USDT")
EXCLUDED_SYMBOLS = env_list("EXCLUDED_SYMBOLS", "USDCUSDT,FDUSDUSDT")
TOP_N = int(env("TOP_N", "10"))

KLINE_LIMIT = int(env("KLINE_LIMIT", "100"))
FETCH_MAX_RETRIES = int(env("FETCH_MAX_RETRIES", "3"))
FETCH_RETRY_DELAY_SEC = float(env("FETCH_RETRY_DELAY_SEC", "1"))
POLL_DELAY_SEC = float(env("POLL_DELAY_SEC", "60"))

ST_PERIOD = int(env("ST_PERIOD", "10"))
ST_MULTIPLIER = float(env("ST_MULTIPLIER", "3"))

NOTIFIER = (env("NOTIFIER", "whatsapp") or "whatsapp").lower()
WHATSAPP_API_URL = env("WHATSAPP_API_URL")
WHATSAPP_NUMBER = env("WHATSAPP_NUMBER")
TELEGRAM_BOT_TOKEN = env("TELEGRAM_BOT_TOKEN")
TELEGRAM_CHAT_ID = env("TELEGRAM_CHAT_ID")
# Telegram hard limit is 4096
TG_CHUNK = int(env("TG_CHUNK", "3500"))

CRON_SECRET = env("CRON_SECRET", "")
MIN_CRON_GAP_SEC = int(env("MIN_CRON_GAP_SEC", "25"))

LOG_LEVEL = (env("LOG_LEVEL", "INFO") or "INFO").upper()
