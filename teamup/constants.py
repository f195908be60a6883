"""
Application constants for TeamUp.

Contains project and task lifecycle states, skill and rating bounds,
matchmaking weights, analytics windows and realtime wire message types.
"""

# =============================================================================
# Project Lifecycle
# =============================================================================

PROJECT_STATUS_OPEN = "open"
PROJECT_STATUS_IN_PROGRESS = "in_progress"
PROJECT_STATUS_COMPLETED = "completed"

PROJECT_STATUSES = (
    PROJECT_STATUS_OPEN,
    PROJECT_STATUS_IN_PROGRESS,
    PROJECT_STATUS_COMPLETED,
)

MEMBER_ROLE_OWNER = "owner"
MEMBER_ROLE_MEMBER = "member"

# =============================================================================
# Skills
# =============================================================================

PROFICIENCY_MIN = 1
PROFICIENCY_MAX = 5

DEFAULT_SKILL_CATEGORY = "General"
DEFAULT_REQUIRED_LEVEL = 3

# =============================================================================
# Matchmaking
# =============================================================================

MAX_RECOMMENDATIONS = 10

# Added once per unfilled seat; uncapped
URGENCY_BONUS_PER_OPEN_SEAT = 10

NO_SKILLS_REASON = "No skills found for user. Please add skills to get recommendations."

# =============================================================================
# Tasks
# =============================================================================

TASK_STATUS_TODO = "todo"
TASK_STATUS_IN_PROGRESS = "in_progress"
TASK_STATUS_REVIEW = "review"
TASK_STATUS_DONE = "done"

# Kanban column order
TASK_STATUSES = (
    TASK_STATUS_TODO,
    TASK_STATUS_IN_PROGRESS,
    TASK_STATUS_REVIEW,
    TASK_STATUS_DONE,
)

TASK_PRIORITY_LOW = "low"
TASK_PRIORITY_MEDIUM = "medium"
TASK_PRIORITY_HIGH = "high"

TASK_PRIORITIES = (TASK_PRIORITY_LOW, TASK_PRIORITY_MEDIUM, TASK_PRIORITY_HIGH)

# Board order within a column: highest first
TASK_PRIORITY_RANK = {
    TASK_PRIORITY_HIGH: 3,
    TASK_PRIORITY_MEDIUM: 2,
    TASK_PRIORITY_LOW: 1,
}

# =============================================================================
# Reviews / Analytics
# =============================================================================

RATING_MIN = 1
RATING_MAX = 5

RECENT_TASK_ACTIVITY = 5
RECENT_REVIEW_ACTIVITY = 3
RECENT_ACTIVITY_LIMIT = 8

# =============================================================================
# Chat / Realtime
# =============================================================================

DEFAULT_CHAT_HISTORY_LIMIT = 50

WS_JOINED = "joined"
WS_NEW_MESSAGE = "new_message"
WS_ERROR = "error"
