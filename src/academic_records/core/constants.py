"""Policy constants and defaults."""

MAX_PENDING_LEAVES = 3

LEAVE_TYPE_MIN_LENGTH = 2
LEAVE_REASON_MIN_LENGTH = 10

GPA_SCALE = 4.0
GPA_ASSIGNMENT_WEIGHT = 0.6
GPA_ATTENDANCE_WEIGHT = 0.4

MIN_SEMESTER = 1
MAX_SEMESTER = 10

NOTIFICATION_CATEGORY_LEAVE = "leave"
DEFAULT_NOTIFICATION_LIMIT = 20
MAX_NOTIFICATION_LIMIT = 100
