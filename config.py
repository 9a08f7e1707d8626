# config.py

import os

# Environment switches:
#   DECK_HOST / DECK_PORT  where the service listens
#   LOG_LEVEL=DEBUG / INFO / WARNING / ERROR
HOST = os.getenv("DECK_HOST", "127.0.0.1")
PORT = int(os.getenv("DECK_PORT", "5000"))
SECRET_KEY = os.getenv("SECRET_KEY", "secret!")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ALLOWED_ORIGINS = os.getenv("CORS_ALLOWED_ORIGINS", "*")
