"""Public configuration schemas."""

from typing import Union

from pydantic import BaseModel, ConfigDict, Field


class TeacherResponse(BaseModel):
    """Response schema for a roster entry."""

    id: Union[int, str]
    name: str
    interval: int


class PublicConfigResponse(BaseModel):
    """Response schema for the public calendar configuration."""

    model_config = ConfigDict(populate_by_name=True)

    teachers: list[TeacherResponse]
    storage_mode: str = Field(..., alias="storageMode")
