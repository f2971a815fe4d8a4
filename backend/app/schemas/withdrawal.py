"""Withdrawal Schemas — admin status change body.

Invariants:
    - status is checked against ADMIN_WITHDRAWAL_TRANSITIONS by the route (400 "Invalid status")
"""

from pydantic import BaseModel, ConfigDict, Field


class WithdrawalStatusUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: str
    admin_notes: str | None = Field(None, alias="adminNotes", max_length=2000)
