"""Handler modules for CRD resources."""

# Import handlers to register them - all handlers register themselves via @kopf decorators
from . import ride  # noqa: F401
from . import ride_operator  # noqa: F401
