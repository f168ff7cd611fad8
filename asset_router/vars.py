import os

SERVICE_NAME = os.getenv("SERVICE_NAME", "asset-router")
NODE_ENV = os.environ.get("NODE_ENV", "")
PORT = int(os.environ.get("PORT", "4001"))
PROXY_TARGET = os.environ.get(
    "WEBPACK_DEV_SERVER_PROXY_TARGET", "https://8x8.vc"
).rstrip("/")

# Empty means "derive from NODE_ENV" (see asset_router.config)
LOCAL_ROOT = os.environ.get("LOCAL_ROOT", "")
CERTS_DIR = os.environ.get("CERTS_DIR", "")
TLS_KEY_FILE = os.environ.get("TLS_KEY_FILE", "")
TLS_CERT_FILE = os.environ.get("TLS_CERT_FILE", "")

PROXY_VERIFY_TLS = os.getenv("PROXY_VERIFY_TLS", "false").lower() == "true"
PROXY_TIMEOUT = float(os.getenv("PROXY_TIMEOUT", "300"))
PROXY_XFWD = os.getenv("PROXY_XFWD", "false").lower() == "true"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

OTLP_ENDPOINT = os.getenv("OTLP_ENDPOINT")
OTLP_HEADERS = os.getenv("OTLP_HEADERS", "")
METRICS_ENABLED = os.getenv("METRICS_ENABLED", "false").lower() == "true"
