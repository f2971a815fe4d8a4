"""Settings Store — read/write the app_settings key/value table.

Invariants:
    - Writes are per-key upserts, each committed on its own: one bad key never undoes the others
    - update_many returns "<key>: <reason>" for every key that failed, in request order
    - Writing the same mapping twice leaves the same stored state (idempotent)
"""

import logging
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.app_setting import AppSetting

logger = logging.getLogger(__name__)


class SettingsStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_all(self) -> dict[str, Any]:
        """All settings as a flat {key: value} mapping."""
        result = await self.db.execute(
            select(AppSetting.key, AppSetting.value).order_by(AppSetting.key),
        )
        return {key: value for key, value in result.all()}

    async def get(self, key: str, fallback: Any = None) -> Any:
        setting = await self.db.get(AppSetting, key)
        return fallback if setting is None else setting.value

    async def set(self, key: str, value: Any, user_id: UUID | None = None) -> None:
        """Upsert one key and commit."""
        if not key or not key.strip():
            raise ValueError("setting key cannot be empty")
        now = datetime.now(timezone.utc)
        setting = await self.db.get(AppSetting, key)
        if setting is None:
            setting = AppSetting(key=key, value=value)
            self.db.add(setting)
        else:
            setting.value = value
        setting.updated_at = now
        setting.updated_by = user_id
        await self.db.commit()

    async def update_many(
        self, values: dict[str, Any], user_id: UUID | None = None,
    ) -> list[str]:
        """Upsert every key; collect per-key failures instead of aborting."""
        failures: list[str] = []
        for key, value in values.items():
            try:
                await self.set(key, value, user_id)
            except (SQLAlchemyError, ValueError) as e:
                await self.db.rollback()
                logger.error(
                    f"Failed to save setting '{key}': {e}",
                    extra={"user_id": user_id},
                )
                failures.append(f"{key}: {e}")
        return failures


async def get_admin_email(store: SettingsStore, default: str) -> str:
    """admin_email from the DB when set, else the configured default."""
    value = await store.get("admin_email", "")
    return value if isinstance(value, str) and value else default
