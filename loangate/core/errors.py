# loangate/core/errors.py


class LoanGateError(Exception):
    """Base class for errors raised by the banking core.

    `detail` mirrors HTTPException so handlers can render it unchanged.
    """

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFoundError(LoanGateError):
    """Referenced user does not exist."""


class ValidationError(LoanGateError):
    """Profile or request data is incomplete for the requested operation."""


class StateError(LoanGateError):
    """Loan is in a state that does not permit the requested operation."""


class ForbiddenError(LoanGateError):
    """Caller may not act on the target user."""
