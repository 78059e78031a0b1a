# fiscaal/core/errors.py


class FiscalError(Exception):
    """Base class for every typed failure of the fiscal engine."""

    status_code = 500

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ValidationError(FiscalError):
    """
    Precondition failure (missing client, missing company profile,
    no line items, unknown period, illegal declaration transition).
    Nothing is written when it is raised.
    """

    status_code = 400


class NotFoundError(FiscalError):
    status_code = 404


class PersistenceConflict(FiscalError):
    """Counter read-modify-write contention that could not be resolved."""

    status_code = 409


class ComputationError(FiscalError):
    status_code = 422
