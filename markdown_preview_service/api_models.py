"""Request models for the editor service API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator


class RenderRequest(BaseModel):
    """Body of ``POST /render``.

    The browser sends ``{"Data": "<markdown>"}``. The key matches in any
    letter case (the last match wins); a missing or null value means empty
    markdown and unknown fields are ignored.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    data: str = ""

    @model_validator(mode="before")
    @classmethod
    def _match_data_key(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        data = None
        for key, item in value.items():
            if key.lower() == "data":
                data = item
        return {"data": "" if data is None else data}
