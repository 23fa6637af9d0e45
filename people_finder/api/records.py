"""Record CRUD API endpoints."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path

from ..core.directory import PeopleDirectory
from ..exceptions import DuplicateRecordError, RecordNotFoundError
from ..models.record import Record
from ..models.request import RecordCreate, RecordUpdate
from .dependencies import get_directory

router = APIRouter(prefix="/api/v1", tags=["records"])


@router.get(
    "/records",
    response_model=List[Record],
    summary="List records",
    description="List all records, most recently created first"
)
async def list_records(directory: PeopleDirectory = Depends(get_directory)) -> List[Record]:
    """List the current snapshot in store order."""
    try:
        return list(directory.records)
        
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Failed to list records: {str(e)}"
        )


@router.post(
    "/records",
    response_model=Record,
    status_code=201,
    summary="Create a record",
    description="Add a person to the collection"
)
def create_record(
    request: RecordCreate,
    directory: PeopleDirectory = Depends(get_directory)
) -> Record:
    """
    Add a record.
    
    Tags may be sent as a list or as one comma-separated string. The id and
    creation time are assigned by the store.
    """
    try:
        return directory.add(request)
        
    except DuplicateRecordError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Failed to create record: {str(e)}"
        )


@router.get(
    "/records/{record_id}",
    response_model=Record,
    summary="Get a record",
    description="Get one record by id"
)
async def get_record(
    record_id: str = Path(..., description="Record identifier"),
    directory: PeopleDirectory = Depends(get_directory)
) -> Record:
    """Get one record by id."""
    record = directory.get(record_id)
    if record is None:
        raise HTTPException(
            status_code=404,
            detail=f"Record '{record_id}' not found"
        )
    return record


@router.patch(
    "/records/{record_id}",
    response_model=Record,
    summary="Update a record",
    description="Overwrite the fields sent in the body"
)
def update_record(
    request: RecordUpdate,
    record_id: str = Path(..., description="Record identifier"),
    directory: PeopleDirectory = Depends(get_directory)
) -> Record:
    """Partially update a record."""
    try:
        return directory.update(record_id, request.changes())
        
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Failed to update record: {str(e)}"
        )


@router.delete(
    "/records/{record_id}",
    summary="Delete a record",
    description="Remove a record from the collection"
)
def delete_record(
    record_id: str = Path(..., description="Record identifier"),
    directory: PeopleDirectory = Depends(get_directory)
) -> dict:
    """Delete a record by id."""
    try:
        if directory.get(record_id) is None:
            raise HTTPException(
                status_code=404,
                detail=f"Record '{record_id}' not found"
            )
        
        directory.delete(record_id)
        
        return {
            "message": f"Record '{record_id}' deleted successfully",
            "total_records": len(directory.records)
        }
        
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Failed to delete record: {str(e)}"
        )
