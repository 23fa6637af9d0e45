"""JSON import and export API endpoints."""

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from fastapi.responses import JSONResponse

from ..core.directory import PeopleDirectory
from ..exceptions import ImportFormatError
from ..models.response import ImportResponse
from ..store.record_store import ImportMode
from .dependencies import get_directory

router = APIRouter(prefix="/api/v1", tags=["transfer"])

EXPORT_FILENAME = "people-export.json"


@router.get(
    "/export",
    summary="Export all records",
    description="Download the whole collection as a JSON array"
)
async def export_records(directory: PeopleDirectory = Depends(get_directory)) -> JSONResponse:
    """Export every record in listing order."""
    try:
        payload = [record.to_json() for record in directory.export_all()]
        
        return JSONResponse(
            status_code=200,
            content=payload,
            headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'}
        )
        
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Export failed: {str(e)}"
        )


@router.post(
    "/import",
    response_model=ImportResponse,
    summary="Import records",
    description="Import a JSON array of records, merging by id or assigning new ids"
)
def import_records(
    payload: Any = Body(..., description="JSON array of records"),
    mode: ImportMode = Query(ImportMode.MERGE, description="'merge' keeps ids, 'newIds' assigns fresh ones"),
    directory: PeopleDirectory = Depends(get_directory)
) -> ImportResponse:
    """
    Import records in bulk.
    
    The body must be a JSON array; anything else is rejected and the
    collection is left untouched.
    """
    try:
        if not isinstance(payload, list):
            raise HTTPException(
                status_code=400,
                detail="Import payload must be a JSON array"
            )
        
        imported = directory.bulk_import(payload, mode)
        
        return ImportResponse(
            mode=mode.value,
            imported=imported,
            total_records=len(directory.records)
        )
        
    except HTTPException:
        raise
    except ImportFormatError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Import failed: {str(e)}"
        )
