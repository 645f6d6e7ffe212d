"""
Company-scoped data access for tenant entities.

Every query filters on company_id; an id owned by another company is reported
exactly like a missing id.
"""

from __future__ import annotations

from typing import Any, Generic, Mapping, TypeVar

from pydantic.alias_generators import to_camel
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import ConflictError, NotFoundError, ValidationError
from app.models.base_columns import utcnow

ModelT = TypeVar("ModelT")
IMMUTABLE_FIELDS = frozenset({"id", "company_id", "created_at"})


class CompanyScopedRepository(Generic[ModelT]):
    """CRUD helpers bound to one model and one company. Never commits."""

    def __init__(self, db: Session, model: type[ModelT], company_id: str, *, not_found_message: str | None = None):
        self.db = db
        self.model = model
        self.company_id = company_id
        self.not_found_message = not_found_message or "Registro não encontrado"

    def _query(self):
        return self.db.query(self.model).filter(self.model.company_id == self.company_id)

    def list(self, *filters, order_by=None) -> list[ModelT]:
        query = self._query()
        if filters:
            query = query.filter(*filters)
        if order_by is None:
            order_by = self.model.created_at.desc()
        return query.order_by(order_by).all()

    def count(self, *filters) -> int:
        query = self._query()
        if filters:
            query = query.filter(*filters)
        return query.count()

    def find(self, entity_id: str) -> ModelT | None:
        return self._query().filter(self.model.id == entity_id).first()

    def get(self, entity_id: str) -> ModelT:
        entity = self.find(entity_id)
        if entity is None:
            raise NotFoundError(self.not_found_message)
        return entity

    def create(self, values: Mapping[str, Any]) -> ModelT:
        entity = self.model(**{**values, "company_id": self.company_id})
        self.db.add(entity)
        self._flush()
        return entity

    def update(self, entity_id: str, values: Mapping[str, Any]) -> ModelT:
        entity = self.get(entity_id)
        columns = self.model.__table__.columns
        changes = {field: value for field, value in values.items() if field not in IMMUTABLE_FIELDS}
        missing = [
            {"field": to_camel(field), "message": "campo obrigatório"}
            for field, value in changes.items()
            if value is None and field in columns and not columns[field].nullable
        ]
        if missing:
            raise ValidationError(errors=missing)
        for field, value in changes.items():
            setattr(entity, field, value)
        entity.updated_at = utcnow()
        self._flush()
        return entity

    def delete(self, entity_id: str) -> ModelT:
        entity = self.get(entity_id)
        self.db.delete(entity)
        self._flush()
        return entity

    def _flush(self) -> None:
        try:
            self.db.flush()
        except IntegrityError as exc:
            self.db.rollback()
            raise ConflictError("Registro em conflito com dados existentes") from exc
