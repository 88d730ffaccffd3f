# =============================================================================================
# APP/ROUTERS/CHIRPS.PY - CHIRP ENDPOINTS
# =============================================================================================
# - POST   /api/chirps            (protected) create a chirp as the caller
# - GET    /api/chirps            list all chirps, oldest first
# - GET    /api/chirps/{chirp_id} fetch one chirp
# - DELETE /api/chirps/{chirp_id} (protected) delete one of the caller's chirps
#
# Protected routes depend on get_current_user / get_current_user_id, which FastAPI
# resolves before the handler body runs: an unauthenticated request never reaches the
# length check. Posting also needs the user row to still exist (tokens outlive a reset).
# =============================================================================================

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from loguru import logger
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.config import Settings, get_settings
from app.core.db import get_db
from app.core.deps import get_current_user, get_current_user_id
from app.core.errors import ForbiddenError, NotFoundError, ValidationError
from app.core.profanity import clean_body
from app.models.chirp import Chirp
from app.models.user import User
from app.schemas.chirp import ChirpIn, ChirpOut
from app.stores.common import translate_errors

router = APIRouter(prefix="/api/chirps", tags=["Chirps"])


def _get_chirp(db: Session, chirp_id: UUID) -> Chirp:
    with translate_errors(db):
        chirp = db.get(Chirp, str(chirp_id))
    if chirp is None:
        raise NotFoundError("Chirp not found")
    return chirp


@router.post("", response_model=ChirpOut, status_code=status.HTTP_201_CREATED)
def create_chirp(
    data: ChirpIn,
    current_user: User = Depends(get_current_user),  # 🔒 AUTHENTICATION REQUIRED
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """
    Post a chirp as the authenticated user.

    REQUEST:
        POST /api/chirps
        Authorization: Bearer eyJhbGci...
        {"body": "I'm the one who knocks!"}

    ERRORS:
        400 Bad Request: Body longer than CHIRP_MAX_LENGTH bytes (nothing is stored)
        401 Unauthorized: Missing or invalid access token, or its user no longer exists
    """
    if len(data.body.encode("utf-8")) > settings.CHIRP_MAX_LENGTH:
        raise ValidationError("Chirp is too long")

    chirp = Chirp(body=clean_body(data.body), user_id=current_user.id)
    with translate_errors(db):
        db.add(chirp)
        db.commit()
        db.refresh(chirp)

    logger.info("User {} posted chirp {}", current_user.id, chirp.id)
    return chirp


@router.get("", response_model=list[ChirpOut])
def list_chirps(db: Session = Depends(get_db)):
    with translate_errors(db):
        return db.execute(select(Chirp).order_by(Chirp.created_at)).scalars().all()


@router.get("/{chirp_id}", response_model=ChirpOut)
def get_chirp(chirp_id: UUID, db: Session = Depends(get_db)):
    return _get_chirp(db, chirp_id)


@router.delete("/{chirp_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_chirp(
    chirp_id: UUID,
    user_id: UUID = Depends(get_current_user_id),  # 🔒 AUTHENTICATION REQUIRED
    db: Session = Depends(get_db),
):
    """
    Delete a chirp. Only its author may do this.

    ERRORS:
        401 Unauthorized: Missing or invalid access token
        403 Forbidden: Chirp belongs to someone else
        404 Not Found: No such chirp
    """
    chirp = _get_chirp(db, chirp_id)
    if chirp.user_id != str(user_id):
        raise ForbiddenError("You can only delete your own chirps")

    with translate_errors(db):
        db.delete(chirp)
        db.commit()

    logger.info("User {} deleted chirp {}", user_id, chirp_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
