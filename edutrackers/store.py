"""Role-scoped data access.

``ScopedStore`` is what the HTTP layer talks to instead of the raw session. It
is bound to one requester and passes every row it reads or writes through the
policy table: reads are silently narrowed to visible rows, writes that no rule
allows raise ``AuthorizationDenied``. Database integrity errors are rolled back
and reported as ``ConstraintViolation`` or ``ReferentialFailure``.
"""

import logging
import re
from typing import Any, Dict, List, Optional, Sequence, Type, TypeVar

from sqlalchemy import inspect, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from edutrackers import provisioning  # noqa: F401  registers the identity listener
from edutrackers.db import Base
from edutrackers.errors import AuthorizationDenied, ConstraintViolation, ReferentialFailure
from edutrackers.models import Announcement, Assignment, Payment, Profile, Result, Submission
from edutrackers.security.policies import (
    Entity,
    Operation,
    PolicyContext,
    can_read,
    check_write,
)
from edutrackers.security.roles import RoleDirectory, RoleLookup

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)

ENTITY_BY_MODEL: Dict[type, Entity] = {
    Profile: Entity.PROFILES,
    Assignment: Entity.ASSIGNMENTS,
    Submission: Entity.SUBMISSIONS,
    Result: Entity.RESULTS,
    Payment: Entity.PAYMENTS,
    Announcement: Entity.ANNOUNCEMENTS,
}


def entity_for(model: type) -> Entity:
    try:
        return ENTITY_BY_MODEL[model]
    except KeyError:
        raise TypeError(f"{model.__name__} is not a policy-protected model") from None


def row_to_dict(obj: Base) -> Dict[str, Any]:
    """Column values of a mapped instance, keyed by attribute name."""

    mapper = inspect(obj).mapper
    return {attr.key: getattr(obj, attr.key) for attr in mapper.column_attrs}


# SQLite: `CHECK constraint failed: name`; PostgreSQL: `violates check constraint "name"`
CHECK_CONSTRAINT_NAME = re.compile(r'check constraint(?: failed:)?\s*"?(\w+)')


def translate_integrity_error(exc: IntegrityError) -> Exception:
    """Map a driver integrity error onto the error taxonomy."""

    message = str(exc.orig).lower()
    if "foreign key" in message:
        return ReferentialFailure("referenced profile or assignment does not exist")
    if "unique" in message or "duplicate key" in message:
        if "assignment_submissions" in message:
            return ConstraintViolation(
                "assignment_submissions_assignment_id_student_id_key",
                "a submission for this assignment already exists",
            )
        return ConstraintViolation("unique", str(exc.orig))
    if "check constraint" in message:
        match = CHECK_CONSTRAINT_NAME.search(message)
        constraint = match.group(1) if match else "check"
        return ConstraintViolation(constraint, str(exc.orig))
    if "not null" in message or "null value" in message:
        return ConstraintViolation("not_null", str(exc.orig))
    return ConstraintViolation("integrity", str(exc.orig))


class ScopedStore:
    """Data access on behalf of a single requester."""

    def __init__(
        self, db: Session, requester_id: Optional[str], roles: Optional[RoleLookup] = None
    ) -> None:
        self.db = db
        self.context = PolicyContext(requester_id, roles or RoleDirectory(db))

    @property
    def requester_id(self) -> Optional[str]:
        return self.context.requester_id

    def is_teacher(self) -> bool:
        return self.context.is_teacher()

    # === reads ===

    def visible(self, obj: Optional[ModelT]) -> bool:
        return obj is not None and can_read(entity_for(type(obj)), row_to_dict(obj), self.context)

    def select(
        self,
        model: Type[ModelT],
        *criteria: Any,
        order_by: Sequence[Any] = (),
    ) -> List[ModelT]:
        """All rows matching ``criteria`` that the requester may see."""

        stmt = select(model).where(*criteria).order_by(*order_by)
        return [obj for obj in self.db.scalars(stmt).all() if self.visible(obj)]

    def count(self, model: Type[ModelT], *criteria: Any) -> int:
        return len(self.select(model, *criteria))

    def get(self, model: Type[ModelT], row_id: str) -> Optional[ModelT]:
        """The row, or ``None`` when it is missing or hidden from the requester."""

        obj = self.db.get(model, row_id)
        return obj if self.visible(obj) else None

    # === writes ===

    def insert(self, model: Type[ModelT], **values: Any) -> ModelT:
        entity = entity_for(model)
        check_write(entity, values, self.context, Operation.INSERT)
        obj = model(**values)
        self.db.add(obj)
        self._commit(entity, Operation.INSERT)
        self.db.refresh(obj)
        return obj

    def update(self, model: Type[ModelT], row_id: str, **changes: Any) -> ModelT:
        entity = entity_for(model)
        obj = self._target(model, entity, row_id, Operation.UPDATE)
        check_write(entity, row_to_dict(obj), self.context, Operation.UPDATE, changes)
        for key, value in changes.items():
            setattr(obj, key, value)
        self._commit(entity, Operation.UPDATE)
        self.db.refresh(obj)
        return obj

    def delete(self, model: Type[ModelT], row_id: str) -> None:
        entity = entity_for(model)
        obj = self._target(model, entity, row_id, Operation.DELETE)
        check_write(entity, row_to_dict(obj), self.context, Operation.DELETE)
        self.db.delete(obj)
        self._commit(entity, Operation.DELETE)

    def _target(self, model: Type[ModelT], entity: Entity, row_id: str, operation: Operation) -> ModelT:
        # a row the requester cannot see is indistinguishable from a missing one
        obj = self.get(model, row_id)
        if obj is None:
            raise AuthorizationDenied(entity.value, operation.value, f"{entity.value} row not found")
        return obj

    def _commit(self, entity: Entity, operation: Operation) -> None:
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            error = translate_integrity_error(exc)
            logger.info("%s on %s rejected: %s", operation.value, entity.value, error)
            raise error from exc
