# This project was developed with assistance from AI tools.
"""Domain error taxonomy shared by services.

Kept free of FastAPI imports so services can raise these from any call site;
routes translate them to HTTP status codes.
"""


class AccessError(Exception):
    """Base class for errors raised by the access and record services."""


class NotFoundError(AccessError):
    """A referenced user, role, or record does not exist or is out of scope."""


class ValidationError(AccessError):
    """A required field is missing or blank. Raised before any read."""


class ConflictError(AccessError):
    """Cross-tenant reassignment, duplicate identity, or a lost write race."""
