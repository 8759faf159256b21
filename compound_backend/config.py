"""Default Flask configuration; override with COMPOUND_* environment variables."""


class Config:
    SERVICE_NAME = "compound-backend"

    # vite dev server
    CORS_ORIGINS = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    LOG_LEVEL = "INFO"

    DEFAULT_CURRENCY = "RUB"

    # used in share text when the page does not send its own location
    SHARE_URL = "http://localhost:5173/"
