"""
Enumerations shared by the stored records.
"""

import enum


class UserRole(str, enum.Enum):
    """
    User role enumeration.
    
    Roles:
        SUPER_ADMIN: Manages users and the list of daily checks
        ADMIN: Reviews reports and manages the roster of managers
        MANAGER: Performs the daily checks and submits reports
    """
    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    MANAGER = "manager"


class TaskProgressStatus(str, enum.Enum):
    """Status of one check inside a daily report."""
    NOT_STARTED = "not_started"  # Report created, check untouched
    IN_PROGRESS = "in_progress"  # Manager pressed start
    COMPLETED = "completed"  # Manager pressed complete, terminal
