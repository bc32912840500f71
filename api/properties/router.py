"""
Property API endpoints (mounted under /api/property).

Status codes: 201 for creates, 404 only for a missing row on fetch-by-id.
Failures are turned into 500 `{"error": message}` by the exception handlers
registered in `main.create_app`.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse

from core import db

from . import repository, schemas

logger = logging.getLogger(__name__)

router = APIRouter()


# Row operations


@router.get("/fetch", response_model=None)
async def get_all_properties(
    database: db.Database = Depends(db.get_database),
) -> list[dict]:
    return await repository.fetch_all_properties(database)


@router.get("/fetch/{property_id}", response_model=None)
async def get_property_by_id(
    property_id: int,
    database: db.Database = Depends(db.get_database),
) -> dict | JSONResponse:
    row = await repository.fetch_property_by_id(database, property_id)
    if row is None:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"message": "Property not found"})
    return row


@router.post("/create", status_code=status.HTTP_201_CREATED, response_model=None)
async def add_property(
    new_property: dict[str, Any] = Body(...),
    database: db.Database = Depends(db.get_database),
) -> dict:
    """
    Insert a row. Keys that are not current table columns are dropped.
    """
    return await repository.insert_property(database, new_property)


@router.put("/update/{property_id}", response_model=None)
async def update_property(
    property_id: int,
    updates: dict[str, Any] = Body(...),
    database: db.Database = Depends(db.get_database),
) -> dict | None:
    """
    Partial update. Responds with null when no row matched `property_id`.
    """
    return await repository.update_property(database, property_id, updates)


@router.delete("/delete/{property_id}", response_model=None)
async def delete_property(
    property_id: int,
    database: db.Database = Depends(db.get_database),
) -> dict:
    await repository.delete_property(database, property_id)
    return {"message": "Property deleted successfully"}


# Column operations


@router.post("/columns/add", status_code=status.HTTP_201_CREATED, response_model=None)
async def add_column(
    request: schemas.AddColumnRequest,
    database: db.Database = Depends(db.get_database),
) -> dict:
    await repository.add_column(database, request.column_name, request.column_type)
    logger.info("column_added column=%s type=%s", request.column_name, request.column_type)
    return {"message": f"Column '{request.column_name}' added successfully"}


@router.put("/columns/rename/{column_name}", response_model=None)
async def rename_column(
    column_name: str,
    request: schemas.RenameColumnRequest,
    database: db.Database = Depends(db.get_database),
) -> dict:
    await repository.rename_column(database, column_name, request.new_name)
    logger.info("column_renamed column=%s new_name=%s", column_name, request.new_name)
    return {"message": f"Column '{column_name}' renamed to '{request.new_name}'"}


@router.delete("/columns/delete/{column_name}", response_model=None)
async def delete_column(
    column_name: str,
    database: db.Database = Depends(db.get_database),
) -> dict:
    await repository.delete_column(database, column_name)
    logger.info("column_deleted column=%s", column_name)
    return {"message": f"Column '{column_name}' deleted successfully"}


@router.get("/columns/fetch", response_model=None)
async def get_columns(
    database: db.Database = Depends(db.get_database),
) -> list[dict]:
    return await repository.get_table_columns(database)
