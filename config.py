import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./dairy.db")
    API_PREFIX = data.get("API_PREFIX", "")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    API_RELOAD = bool(data.get("API_RELOAD", False))
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    CREATE_TABLES_ON_STARTUP = bool(data.get("CREATE_TABLES_ON_STARTUP", True))

    # Farm defaults, used when the settings row is created on first read
    DEFAULT_FARM_NAME = data.get("DEFAULT_FARM_NAME", "My Dairy Farm")
    DEFAULT_GLOBAL_PRICE_PER_LITER = data.get("DEFAULT_GLOBAL_PRICE_PER_LITER", "60.00")
    CURRENCY_SYMBOL = data.get("CURRENCY_SYMBOL", "Rs.")

    # Invoice numbering
    INVOICE_ALLOCATION_MAX_ATTEMPTS = data.get("INVOICE_ALLOCATION_MAX_ATTEMPTS", 100)
    BILL_INSERT_ATTEMPTS = data.get("BILL_INSERT_ATTEMPTS", 3)

    # WhatsApp delivery (Green API)
    GREEN_API_BASE_URL = data.get("GREEN_API_BASE_URL", "https://api.green-api.com")
    MESSAGING_TIMEOUT_SECONDS = data.get("MESSAGING_TIMEOUT_SECONDS", 30.0)
    WHATSAPP_VERIFY_TOKEN = data.get("WHATSAPP_VERIFY_TOKEN", "")
