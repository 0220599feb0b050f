"""Constants for the Theme Park Operator."""

# API Group
API_GROUP = "themepark.n3wscott.com"
API_VERSION = "v1alpha1"
API_GROUP_VERSION = f"{API_GROUP}/{API_VERSION}"

# Resource Kinds
KIND_RIDE = "Ride"
KIND_RIDE_OPERATOR = "RideOperator"

# Plurals
PLURAL_RIDES = "rides"
PLURAL_RIDE_OPERATORS = "rideoperators"

# Field Manager
FIELD_MANAGER = "theme-park-operator"
CONTROLLER_NAME = "theme-park-operator"

# Bumped on a Ride when an operator assigned to it changes
ANNOTATION_OPERATORS_CHANGED = f"{API_GROUP}/operators-changed"

# Condition Types
COND_READY = "Ready"
COND_OPERATIONAL = "Operational"

# Condition Statuses
STATUS_TRUE = "True"
STATUS_FALSE = "False"
STATUS_UNKNOWN = "Unknown"

# Condition Reasons
REASON_CREATING = "Creating"
REASON_AVAILABLE = "Available"
REASON_DELETING = "Deleting"
REASON_OPERATING = "Operating"
REASON_SHORT_STAFFED = "ShortStaffed"

# Connection detail keys
CONNECTION_USER_KEY = "user"
CONNECTION_ENDPOINT_KEY = "endpoint"

# Event Reasons
EVENT_REASON_RECONCILE_STARTED = "ReconcileStarted"
EVENT_REASON_RECONCILE_FAILED = "ReconcileFailed"
EVENT_REASON_RIDE_OPERATING = "RideOperating"
EVENT_REASON_RIDE_SHORT_STAFFED = "RideShortStaffed"
