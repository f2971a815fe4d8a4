"""Root conftest — shared test configuration."""

import os

# Ensure tests never reach the real identity service or SIRI proxy
os.environ.setdefault("IDENTITY_SERVICE_KEY", "test-service-key")
os.environ.setdefault("IDENTITY_URL", "http://identity.test")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.pop("SIRI_PROXY_URL", None)
os.environ.pop("NOTIFICATION_WEBHOOK_URL", None)
