"""
Data Routes - Export, import and reset of all habit data
"""
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse

from habittrack.core.config import settings
from habittrack.core.dependencies import get_store, get_today
from habittrack.core.exceptions import InvalidImportError, StorageError
from habittrack.services import backup
from habittrack.services.habits.store import HabitStore

router = APIRouter(prefix="/data", tags=["data"])


@router.get("/export")
async def export_data(store: HabitStore = Depends(get_store), today: date = Depends(get_today)):
    """Download everything as a .habittrack file"""
    filename = backup.export_filename(today)
    return JSONResponse(
        content=backup.export_from(store),
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )


@router.post("/backup", status_code=201)
async def write_backup(store: HabitStore = Depends(get_store)):
    """Write a .habittrack file into HABITTRACK_EXPORT_DIR"""
    try:
        path = backup.write_export_file(store, settings.EXPORT_DIR)
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return {"status": "success", "path": str(path)}


@router.post("/import")
async def import_data(request: Request, store: HabitStore = Depends(get_store)):
    """Replace all data with the contents of a .habittrack file (request body)"""
    raw = await request.body()
    try:
        return backup.import_into(store, raw)
    except InvalidImportError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/reset")
async def reset_data(store: HabitStore = Depends(get_store)):
    """Delete every habit and check-in"""
    try:
        store.reset_data()
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return {"status": "success", "message": "All data reset"}
