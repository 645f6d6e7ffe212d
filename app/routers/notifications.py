from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.errors import NotFoundError
from app.deps import get_current_user, require_company_access
from app.models.notification import Notification
from app.models.user import User
from app.schemas.notification import ExpiryAlertsRunRead, NotificationRead, UnreadCountRead
from app.services.authorization_service import Action, RequestContext
from app.services.expiry_alerts import create_expiry_notifications

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


def _own_notifications(db: Session, *, user_id: str, company_id: str):
    return db.query(Notification).filter(
        Notification.user_id == user_id,
        Notification.company_id == company_id,
    )


@router.get("/unread-count/{company_id}", response_model=UnreadCountRead)
def unread_count(
    context: RequestContext = Depends(require_company_access(Action.READ)),
    db: Session = Depends(get_db),
):
    count = (
        _own_notifications(db, user_id=context.acting_user_id, company_id=context.effective_company_id)
        .filter(Notification.is_read.is_(False))
        .count()
    )
    return {"count": count}


@router.post("/create-expiry-alerts/{company_id}", response_model=ExpiryAlertsRunRead)
def run_expiry_alerts(
    context: RequestContext = Depends(require_company_access(Action.UPDATE)),
    db: Session = Depends(get_db),
):
    created = create_expiry_notifications(db, context.effective_company_id)
    return {"success": True, "created": created}


@router.post("/{notification_id}/mark-read")
def mark_read(
    notification_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    notification = (
        db.query(Notification)
        .filter(Notification.id == notification_id, Notification.user_id == user.id)
        .first()
    )
    if notification is None:
        raise NotFoundError("Notificação não encontrada")
    notification.is_read = True
    db.commit()
    return {"success": True}


@router.get("/{company_id}", response_model=List[NotificationRead])
def list_notifications(
    context: RequestContext = Depends(require_company_access(Action.READ)),
    db: Session = Depends(get_db),
):
    return (
        _own_notifications(db, user_id=context.acting_user_id, company_id=context.effective_company_id)
        .order_by(Notification.created_at.desc())
        .all()
    )
