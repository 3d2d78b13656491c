"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field


class ParserConfig(BaseModel):
    model_config = {"extra": "forbid"}

    agency: str = Field(default="NOAA", min_length=1)
    summary_window: int = Field(default=60, ge=1)
    day_header_window: int = Field(default=10, ge=1)
    triplet_window: int = Field(default=20, ge=1)
    sort_series: bool = True


class OutputConfig(BaseModel):
    model_config = {"extra": "forbid"}

    json_indent: int = Field(default=2, ge=0)
    include_days: bool = True


class AppConfig(BaseModel):
    model_config = {"extra": "forbid"}

    parser: ParserConfig = ParserConfig()
    output: OutputConfig = OutputConfig()
