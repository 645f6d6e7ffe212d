from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, Iterator

from sqlalchemy.orm import Session

from app.models.asset import Asset
from app.models.enums import AssetType, ExpiryUrgency, InfrastructureService, UserRole
from app.models.notification import Notification
from app.models.user_company import UserCompany

logger = logging.getLogger(__name__)

CRITICAL_WINDOW = timedelta(days=7)
UPCOMING_WINDOW = timedelta(days=30)
NOTIFICATION_TYPE = "expiry_alert"

SERVICE_FIELDS: dict[InfrastructureService, str] = {
    InfrastructureService.DOMAIN: "domain_expiry",
    InfrastructureService.SSL: "ssl_expiry",
    InfrastructureService.HOSTING: "hosting_expiry",
    InfrastructureService.SERVER: "server_expiry",
}

# Textos exibidos ao cliente final.
SERVICE_LABELS: dict[InfrastructureService, str] = {
    InfrastructureService.DOMAIN: "Dominio",
    InfrastructureService.SSL: "SSL",
    InfrastructureService.HOSTING: "Hosting",
    InfrastructureService.SERVER: "Servidor",
}

URGENCY_LABELS: dict[ExpiryUrgency, str] = {
    ExpiryUrgency.EXPIRED: "EXPIRADO",
    ExpiryUrgency.CRITICAL: "CRÍTICO",
    ExpiryUrgency.UPCOMING: "PRÓXIMO A VENCER",
}


@dataclass(frozen=True)
class ExpiringService:
    asset: Asset
    service: InfrastructureService
    expiry: datetime
    urgency: ExpiryUrgency

    def days_until(self, now: datetime) -> int:
        return math.ceil((self.expiry - now).total_seconds() / 86400)


def classify_expiry(expiry: datetime | None, now: datetime) -> ExpiryUrgency | None:
    if expiry is None:
        return None
    if expiry < now:
        return ExpiryUrgency.EXPIRED
    if expiry <= now + CRITICAL_WINDOW:
        return ExpiryUrgency.CRITICAL
    if expiry <= now + UPCOMING_WINDOW:
        return ExpiryUrgency.UPCOMING
    return None


def collect_expiring_services(assets: Iterable[Asset], now: datetime) -> Iterator[ExpiringService]:
    for asset in assets:
        if asset.type != AssetType.APPLICATION.value:
            continue
        for service, field in SERVICE_FIELDS.items():
            expiry = getattr(asset, field)
            urgency = classify_expiry(expiry, now)
            if urgency is not None:
                yield ExpiringService(asset=asset, service=service, expiry=expiry, urgency=urgency)


def build_title(item: ExpiringService) -> str:
    return f"{URGENCY_LABELS[item.urgency]}: {SERVICE_LABELS[item.service]} - {item.asset.name}"


def build_message(item: ExpiringService) -> str:
    service_label = SERVICE_LABELS[item.service].lower()
    if item.urgency == ExpiryUrgency.EXPIRED:
        return f"El {service_label} de {item.asset.name} ha expirado"
    return f"El {service_label} de {item.asset.name} expira el {item.expiry:%d/%m/%Y}"


def resolve_recipients(item: ExpiringService, memberships: Iterable[UserCompany]) -> list[str]:
    technician_id = item.asset.assigned_technician_id
    recipients = [technician_id] if technician_id else []
    for membership in memberships:
        if membership.role == UserRole.TECHNICIAN.value or membership.user_id == technician_id:
            continue
        if membership.user_id not in recipients:
            recipients.append(membership.user_id)
    return recipients


def list_expiring_services(db: Session, company_id: str, now: datetime | None = None) -> list[ExpiringService]:
    now = now or datetime.utcnow()
    assets = (
        db.query(Asset)
        .filter(Asset.company_id == company_id, Asset.type == AssetType.APPLICATION.value)
        .all()
    )
    items = list(collect_expiring_services(assets, now))
    items.sort(key=lambda item: item.expiry)
    return items


def create_expiry_notifications(db: Session, company_id: str, now: datetime | None = None) -> int:
    """Persist one notification per (recipient, asset, service) currently expiring.

    Runs are not deduplicated: each call inserts a fresh batch.
    """
    now = now or datetime.utcnow()
    memberships = db.query(UserCompany).filter(UserCompany.company_id == company_id).all()

    created = 0
    for item in list_expiring_services(db, company_id, now):
        title = build_title(item)
        message = build_message(item)
        for user_id in resolve_recipients(item, memberships):
            db.add(
                Notification(
                    company_id=company_id,
                    user_id=user_id,
                    title=title,
                    message=message,
                    type=NOTIFICATION_TYPE,
                    entity_type="asset",
                    entity_id=item.asset.id,
                    is_read=False,
                )
            )
            created += 1

    db.commit()
    logger.info("Expiry notifications created: company_id=%s created=%s", company_id, created)
    return created
