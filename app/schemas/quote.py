from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class QuoteRequest(BaseModel):
    """Selected calculator options (camelCase aliases accepted)."""

    model_config = ConfigDict(populate_by_name=True)

    ssd: Literal["240", "480", "960"] | None = Field(None, description="SSD size in GB")
    windows: bool = False
    deep_clean: bool = Field(False, alias="deepClean")
    gpu_service: bool = Field(False, alias="gpuService")
    data_rescue: bool = Field(False, alias="dataRescue")
    locale: str | None = Field(None, description="Label language (en, hu, sr)")


class QuoteLineOut(BaseModel):
    key: str
    label: str
    amount: int


class QuoteResponse(BaseModel):
    locale: str
    title: str
    lines: list[QuoteLineOut]
    total: int
    total_label: str
    currency: str
    formatted: str
