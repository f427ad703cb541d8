"""
Domain Errors

Every error raised by the rental core carries a stable ``code`` and a
``context`` dict so callers can render a localized message themselves.

- ValidationError: input rejected before any mutation
- NotFoundError: a referenced party/item/booking/entry does not resolve
- StateConflictError: operation not allowed in the current state
- CreditLimitExceededError: booking would push a party past its limit
- OperationFailed: a multi-step operation failed and was rolled back
"""

from typing import Any


class DomainError(Exception):
    """Base class for errors raised by the domain layer"""

    code = 'domain_error'
    default_message = 'Domain rule violated'

    def __init__(self, message: str | None = None, **context: Any):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        self.context = context

    def to_dict(self) -> dict:
        return {
            'code': self.code,
            'detail': self.message,
            'context': self.context,
        }


class ValidationError(DomainError):
    code = 'validation_error'
    default_message = 'Invalid input'


class NotFoundError(DomainError):
    code = 'not_found'
    default_message = 'Object not found'

    def __init__(self, entity: str, entity_id: Any, message: str | None = None, **context: Any):
        super().__init__(
            message or f"{entity} {entity_id} not found",
            entity=entity,
            entity_id=entity_id,
            **context,
        )


class StateConflictError(DomainError):
    code = 'state_conflict'
    default_message = 'Operation not allowed in the current state'


class CreditLimitExceededError(StateConflictError):
    code = 'credit_limit_exceeded'
    default_message = 'Credit limit exceeded'


class OperationFailed(DomainError):
    code = 'operation_failed'
    default_message = 'Operation failed and was rolled back'
