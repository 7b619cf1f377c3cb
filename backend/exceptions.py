"""
Error taxonomy raised by the inventory repositories.

Each error carries the HTTP status code the routers answer with, so the API
layer can translate any of them with a single except clause.
"""


class InventoryError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(InventoryError):
    """Missing or malformed input. The caller's fault, never retried."""
    status_code = 400


class NotFoundError(InventoryError):
    """A referenced ingredient, batch or menu item does not exist."""
    status_code = 404


class ConflictError(InventoryError):
    """An ingredient with the same name already exists."""
    status_code = 409


class DepletedError(InventoryError):
    """
    The batch is already at zero.

    This is an ordinary outcome of the usage flow rather than a fault; the
    caller should tell the user and move on.
    """
    status_code = 400
