"""SIRI Proxy Schemas."""

from pydantic import BaseModel, ConfigDict, Field


class SiriProxyRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    stop_code: str = Field(alias="stopCode", min_length=1, max_length=32)
    line_ref: str | None = Field(None, alias="lineRef", max_length=32)
    operator_ref: str | None = Field(None, alias="operatorRef", max_length=32)
