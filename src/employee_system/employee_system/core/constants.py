"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

AUDIT_ACTION_ROLE_CHANGE = "ROLE_CHANGE"
AUDIT_RESOURCE_EMPLOYEE = "EMPLOYEE"

DEFAULT_ROLE_CHANGE_REASON = "Role update"
DEFAULT_NOTIFICATION_LIMIT = 50
MAX_NOTIFICATION_LIMIT = 200

# A super admin may only leave the role while at least one other holder remains.
MIN_SUPER_ADMINS_FOR_DEMOTION = 2
