"""Error taxonomy shared by the policy evaluator, the scoped store and the API."""

from typing import Optional


class EduTrackersError(Exception):
    """Base class for every error reported upward by the data core."""


class AuthorizationDenied(EduTrackersError):
    """A write was rejected (or its target row is hidden) because no rule matched."""

    def __init__(self, entity: str, operation: str, message: Optional[str] = None) -> None:
        self.entity = entity
        self.operation = operation
        super().__init__(message or f"{operation} on {entity} denied")


class ConstraintViolation(EduTrackersError):
    """Uniqueness, check, not-null or state-transition violation."""

    def __init__(self, constraint: str, message: Optional[str] = None) -> None:
        self.constraint = constraint
        super().__init__(message or f"constraint {constraint} violated")


class ProvisioningError(ConstraintViolation):
    """Profile synthesis failed, so the identity insert must fail with it."""


class ReferentialFailure(EduTrackersError):
    """A write references a Profile or Assignment that does not exist."""

    def __init__(self, message: str = "referenced row does not exist") -> None:
        super().__init__(message)
