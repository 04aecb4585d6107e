"""Row-level authorization rules.

Every read and write goes through this table of ``(entity, operation,
predicate)`` rules. Rules are permissive: an operation is allowed when at least
one rule for the entity/operation pair matches, and denied when none does
(including when no rule exists at all, e.g. deleting a result).

Predicates are pure functions of the policy context and a row mapping, so the
table can be exercised without a database. The requester is always explicit in
``PolicyContext``; nothing here reads a "current user" from ambient state.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, FrozenSet, List, Mapping, Optional, Tuple

from edutrackers.errors import AuthorizationDenied
from edutrackers.models.enums import SubmissionStatus
from edutrackers.security.roles import RoleLookup

logger = logging.getLogger(__name__)

Row = Mapping[str, Any]


class Entity(str, enum.Enum):
    PROFILES = "profiles"
    ASSIGNMENTS = "assignments"
    SUBMISSIONS = "assignment_submissions"
    RESULTS = "results"
    PAYMENTS = "payments"
    ANNOUNCEMENTS = "announcements"


class Operation(str, enum.Enum):
    SELECT = "select"
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"
    ALL = "all"


@dataclass(frozen=True)
class PolicyContext:
    """Who is asking. ``requester_id`` is ``None`` for anonymous callers."""

    requester_id: Optional[str]
    roles: RoleLookup

    def is_teacher(self) -> bool:
        return self.requester_id is not None and self.roles.is_teacher(self.requester_id)


Predicate = Callable[[PolicyContext, Row], bool]


@dataclass(frozen=True)
class Rule:
    name: str
    entity: Entity
    operation: Operation
    predicate: Predicate

    def applies_to(self, entity: Entity, operation: Operation) -> bool:
        return self.entity == entity and self.operation in (operation, Operation.ALL)


def always(_context: PolicyContext, _row: Row) -> bool:
    return True


def requester_is_teacher(context: PolicyContext, _row: Row) -> bool:
    return context.is_teacher()


def owns(column: str) -> Predicate:
    """Match rows whose ``column`` holds the requester's id."""

    def predicate(context: PolicyContext, row: Row) -> bool:
        return context.requester_id is not None and row.get(column) == context.requester_id

    predicate.__name__ = f"owns_{column}"
    return predicate


def any_of(*predicates: Predicate) -> Predicate:
    def predicate(context: PolicyContext, row: Row) -> bool:
        return any(p(context, row) for p in predicates)

    return predicate


_P = Entity.PROFILES
_A = Entity.ASSIGNMENTS
_S = Entity.SUBMISSIONS
_R = Entity.RESULTS
_PAY = Entity.PAYMENTS
_ANN = Entity.ANNOUNCEMENTS

RULES: Tuple[Rule, ...] = (
    Rule("Users can view their own profile", _P, Operation.SELECT, owns("id")),
    Rule("Teachers can view all profiles", _P, Operation.SELECT, requester_is_teacher),
    Rule("Users can update their own profile", _P, Operation.UPDATE, owns("id")),

    Rule("Everyone can view assignments", _A, Operation.SELECT, always),
    Rule("Teachers can create assignments", _A, Operation.INSERT, requester_is_teacher),
    Rule("Teachers can update their own assignments", _A, Operation.UPDATE, owns("teacher_id")),
    Rule("Teachers can delete their own assignments", _A, Operation.DELETE, owns("teacher_id")),

    Rule("Students can view their own submissions", _S, Operation.SELECT, owns("student_id")),
    Rule("Teachers can view all submissions", _S, Operation.SELECT, requester_is_teacher),
    # one row per (assignment_id, student_id) is the unique constraint's job
    Rule("Students can create their own submissions", _S, Operation.INSERT, owns("student_id")),
    Rule("Teachers can update submissions", _S, Operation.UPDATE, requester_is_teacher),

    Rule(
        "Students view own results, teachers view all",
        _R,
        Operation.SELECT,
        any_of(owns("student_id"), requester_is_teacher),
    ),
    Rule("Teachers can create results", _R, Operation.INSERT, requester_is_teacher),
    Rule("Teachers can update their own results", _R, Operation.UPDATE, owns("teacher_id")),

    Rule("Students can view their own payments", _PAY, Operation.SELECT, owns("student_id")),
    Rule("Teachers can manage payments", _PAY, Operation.ALL, requester_is_teacher),

    Rule("Everyone can view announcements", _ANN, Operation.SELECT, always),
    Rule("Teachers can create announcements", _ANN, Operation.INSERT, requester_is_teacher),
    Rule("Teachers can delete their announcements", _ANN, Operation.DELETE, owns("teacher_id")),
)

# columns no update may change, whatever rule allowed the update
PROTECTED_COLUMNS: Dict[Entity, FrozenSet[str]] = {
    entity: frozenset({"id"}) for entity in Entity
}
PROTECTED_COLUMNS[Entity.PROFILES] = frozenset({"id", "role", "email"})

# values a non-teacher insert must leave at their defaults
TEACHER_SET_ON_INSERT: Dict[Entity, Dict[str, Any]] = {
    Entity.SUBMISSIONS: {"grade": None, "feedback": None, "status": SubmissionStatus.SUBMITTED},
}


def rules_for(entity: Entity, operation: Operation) -> List[Rule]:
    return [rule for rule in RULES if rule.applies_to(entity, operation)]


def _matches(entity: Entity, operation: Operation, row: Row, context: PolicyContext) -> bool:
    return any(rule.predicate(context, row) for rule in rules_for(entity, operation))


def _insert_uses_defaults(entity: Entity, row: Row) -> bool:
    defaults = TEACHER_SET_ON_INSERT.get(entity, {})
    return all(row.get(column, default) in (None, default) for column, default in defaults.items())


def can_read(entity: Entity, row: Row, context: PolicyContext) -> bool:
    return _matches(Entity(entity), Operation.SELECT, row, context)


def can_write(
    entity: Entity,
    row: Row,
    context: PolicyContext,
    operation: Operation,
    changes: Optional[Mapping[str, Any]] = None,
) -> bool:
    """Decide an insert, update or delete.

    ``row`` is the candidate row for inserts and the current row for updates and
    deletes. For updates the rules must also accept the row as it would look
    after ``changes`` are applied, so an update cannot move a row out of the
    requester's reach (e.g. reassign ``teacher_id``).
    Inserts by non-teachers must also leave grading columns at their defaults.
    """

    entity = Entity(entity)
    operation = Operation(operation)
    if operation in (Operation.SELECT, Operation.ALL):
        raise ValueError(f"{operation.value} is not a write operation")

    if not _matches(entity, operation, row, context):
        return False
    if operation == Operation.INSERT:
        return _insert_uses_defaults(entity, row) or context.is_teacher()
    if operation != Operation.UPDATE or not changes:
        return True

    touched = {
        column
        for column in PROTECTED_COLUMNS[entity]
        if column in changes and changes[column] != row.get(column)
    }
    if touched:
        return False
    return _matches(entity, operation, {**row, **changes}, context)


def check_write(
    entity: Entity,
    row: Row,
    context: PolicyContext,
    operation: Operation,
    changes: Optional[Mapping[str, Any]] = None,
) -> None:
    """``can_write`` that raises ``AuthorizationDenied`` instead of returning False."""

    if can_write(entity, row, context, operation, changes):
        return
    entity = Entity(entity)
    operation = Operation(operation)
    logger.warning(
        "denied %s on %s for requester %s", operation.value, entity.value, context.requester_id
    )
    raise AuthorizationDenied(entity.value, operation.value)
