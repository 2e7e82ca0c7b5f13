from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class OkResponse(BaseModel):
    ok: bool = True


class ContactResponse(BaseModel):
    """Contact submission result.

    ``remaining`` is omitted for honeypot hits, which report ``hp`` instead.
    """

    ok: bool = True
    remaining: int | None = Field(None, description="Submissions left in the current window")
    hp: bool | None = Field(None, description="Set when the honeypot field was filled")


class AutosaveRequest(BaseModel):
    """Loosely typed autosave body; values are coerced by the service."""

    model_config = ConfigDict(populate_by_name=True)

    selector: Any = None
    data: Any = None
    failed_submit: Any = Field(False, alias="failedSubmit")
