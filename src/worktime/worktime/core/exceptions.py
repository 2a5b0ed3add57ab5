class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class PersistenceConflictError(DomainError):
    """Raised by a repository when a concurrent write won the race for a record."""

    def __init__(self, worker_id: str, work_day, message: str | None = None):
        self.worker_id = worker_id
        self.work_day = work_day
        super().__init__(message or f"Concurrent update of record {worker_id}@{work_day}")


class TransientFailureError(DomainError):
    """Raised when persistence conflicts persist after the bounded retries."""

    def __init__(self, worker_id: str, work_day, attempts: int):
        self.worker_id = worker_id
        self.work_day = work_day
        self.attempts = attempts
        super().__init__(f"Could not persist record {worker_id}@{work_day} after {attempts} attempts")
