"""
Error taxonomy for RosterDesk services.

Services raise DomainError subclasses; the API layer (core.permissions.
TenantScopedMixin) renders them as JSON with the status carried by the class:

  ValidationError     400  malformed or out-of-range input, never retried
  NotFoundError       404  missing, soft-deleted or cross-tenant entity
  SlotFullError       409  expected outcome of contention for the last seat
  TransactionFailure  500  storage fault during a locked write; the only
                           class a caller may retry (state is unchanged)
"""


class DomainError(Exception):
    """Base class for errors that map to a client-visible response."""

    code = "INTERNAL"
    status = 500
    retryable = False

    def __init__(self, message: str = "", details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def as_dict(self) -> dict:
        """Return the JSON error body for this error."""
        body = {"code": self.code, "message": self.message, "details": self.details}
        if self.retryable:
            body["retryable"] = True
        return body


class ValidationError(DomainError):
    code = "VALIDATION"
    status = 400


class NotFoundError(DomainError):
    code = "NOT_FOUND"
    status = 404

    def __init__(self, entity: str, entity_id):
        super().__init__(
            f"{entity} not found",
            details={"entity": entity, "id": str(entity_id)},
        )
        self.entity = entity
        self.entity_id = entity_id


class SlotFullError(DomainError):
    """The slot already holds required_count live assignments."""

    code = "SLOT_FULL"
    status = 409

    def __init__(self, slot_id, current_count: int, required_count: int):
        super().__init__(
            f"slot is full: {current_count}/{required_count}",
            details={
                "slot_id": str(slot_id),
                "current_count": current_count,
                "required_count": required_count,
            },
        )
        self.slot_id = slot_id
        self.current_count = current_count
        self.required_count = required_count


class TransactionFailure(DomainError):
    code = "TRANSACTION_FAILED"
    status = 500
    retryable = True
