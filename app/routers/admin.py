# =============================================================================================
# APP/ROUTERS/ADMIN.PY - DEVELOPMENT-ONLY ADMIN ENDPOINTS
# =============================================================================================

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from loguru import logger
from sqlalchemy.orm import Session

from app.core.config import Settings, get_settings
from app.core.db import get_db
from app.core.errors import ForbiddenError
from app.stores.users import UserStore

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post("/reset", response_class=PlainTextResponse)
def reset(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """
    Delete every user (chirps and refresh tokens go with them).

    Only allowed when PLATFORM=dev; anywhere else it is a 403 and nothing is deleted.
    Users are the only state reset here: this service keeps no file-server hit counter.
    Access tokens already issued stay valid until they expire; endpoints that need the
    user row (POST /api/chirps) reject them with 401.
    """
    if settings.PLATFORM != "dev":
        logger.warning("Refused /admin/reset on platform {!r}", settings.PLATFORM)
        raise ForbiddenError("Action is not permitted")

    deleted = UserStore(db).delete_all()
    logger.info("Reset: deleted {} users", deleted)
    return "Reset successful"
