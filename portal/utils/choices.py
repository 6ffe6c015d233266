"""
Audience and team-role constants and helpers.

Centralized definitions for enumerated column values to eliminate string
literals scattered across the codebase.
"""

from typing import Tuple

# Audience (target) values stored in the database
TARGET_EMPLOYEE = "EMPLOYEE"
TARGET_STUDENT = "STUDENT"

ALL_TARGETS: Tuple[str, ...] = (TARGET_EMPLOYEE, TARGET_STUDENT)

# Team member roles
ROLE_CHAIRMAN = "CHAIRMAN"
ROLE_DEPUTY_CHAIRMAN = "DEPUTY_CHAIRMAN"
ROLE_SUPERVISOR = "SUPERVISOR"

ALL_ROLES: Tuple[str, ...] = (ROLE_CHAIRMAN, ROLE_DEPUTY_CHAIRMAN, ROLE_SUPERVISOR)

# Roles that at most one team member may hold at a time
SINGLETON_ROLES: Tuple[str, ...] = (ROLE_CHAIRMAN, ROLE_DEPUTY_CHAIRMAN)


def is_valid_target(target: str) -> bool:
    """Return True if the provided target is one of the supported audiences."""
    return target in ALL_TARGETS


def is_valid_role(role: str) -> bool:
    return role in ALL_ROLES


def is_singleton_role(role: str) -> bool:
    return role in SINGLETON_ROLES
