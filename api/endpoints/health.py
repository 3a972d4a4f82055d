from datetime import datetime, timezone
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from api.deps import get_database, get_object_store
from domain.errors import StoreUnavailable
from infra.db.session import Database

router = APIRouter()


@router.get("/health")
def health():
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


@router.get("/health/db")
def db_health(db: Database = Depends(get_database)):
    try:
        db.ping()
    except StoreUnavailable as exc:
        return JSONResponse(status_code=503, content=exc.to_body())
    return {"status": "ok", "dialect": db.engine.dialect.name}


@router.get("/health/storage")
def storage_health(store=Depends(get_object_store)):
    try:
        store.ping()
    except StoreUnavailable as exc:
        return JSONResponse(status_code=503, content=exc.to_body())
    return {"status": "ok", "backend": store.backend}
