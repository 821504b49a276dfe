"""Domain error taxonomy.

Learn: Services and auth components raise these; route handlers and the
auth gate translate them into HTTP responses. None of them should ever
crash the process: each one is recoverable at the request boundary.

Request validation errors are not listed here: pydantic models reject
malformed input before a handler runs, and FastAPI renders the
field-level detail as a 422.
"""


class TaskifyError(Exception):
    """Base class for all expected, recoverable failures."""


class AuthError(TaskifyError):
    """Missing, malformed, forged, or expired bearer token.

    The message is generic; the concrete cause is only logged.
    """


class CredentialError(TaskifyError):
    """Unknown email or wrong password at login (indistinguishable)."""


class NotFoundError(TaskifyError):
    """Resource does not exist for this owner.

    Also covers resources owned by someone else: the owner-scoped query
    cannot tell the two apart, so neither can the caller.
    """


class ConflictError(TaskifyError):
    """Uniqueness violation, e.g. registering an email twice."""
