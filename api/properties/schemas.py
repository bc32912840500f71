"""
Pydantic schemas for column-management endpoints.

Row endpoints take free-form JSON objects; their keys are filtered against
the live table columns in the repository.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class AddColumnRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    column_name: str = Field(..., alias="columnName")
    column_type: str = Field(..., alias="columnType")


class RenameColumnRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    new_name: str = Field(..., alias="newName")
