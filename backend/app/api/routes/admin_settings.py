"""Admin Settings — read and bulk-update the app_settings key/value store.

Invariants:
    - GET returns a flat {key: value} object
    - PUT upserts every key; any per-key failure -> 500 with "key: reason" messages joined by "; "
    - Applying the same body twice yields the same stored state and 200 both times
"""

from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import json_body, require_admin
from app.core.errors import SettingsUpdateError
from app.infrastructure.database import get_db
from app.services.settings_store import SettingsStore

router = APIRouter(prefix="/api/admin/settings", tags=["admin-settings"])


@router.get("")
async def get_settings_values(
    admin_id: UUID = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await SettingsStore(db).get_all()


@router.put("")
async def update_settings(
    admin_id: UUID = Depends(require_admin),
    values: dict[str, Any] = Depends(json_body(dict[str, Any])),
    db: AsyncSession = Depends(get_db),
):
    failures = await SettingsStore(db).update_many(values, user_id=admin_id)
    if failures:
        raise SettingsUpdateError(failures)
    return {"success": True}
