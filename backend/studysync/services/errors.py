class AdminRequiredError(Exception):
    """Raised when an admin-only roster operation is attempted while logged out."""


class ConfirmationRequiredError(Exception):
    """Raised when a destructive reset is requested without explicit confirmation."""


class SubmissionInProgressError(Exception):
    """Raised when a registration arrives while another one is still being processed."""


class EmptyExportError(Exception):
    pass


class RecordNotFoundError(Exception):
    pass
