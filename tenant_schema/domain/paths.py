"""Canonical Firestore paths for tenant-partitioned data.

Single source of truth for where entities live. Every builder returns a
slash-joined path that starts with ``tenants/{tenant_id}`` (or
``users/{uid}`` for user roots) and never names a legacy container.

Builders are total: they accept empty ids without complaint so that a path
can always be built. Callers must not pass empty ids for production reads
or writes; use require_tenant_id / validate_canonical at the boundary.

Example:
    from tenant_schema.domain.paths import p

    p.job_order("acme", "jo-1")  # "tenants/acme/jobOrders/jo-1"
"""

import logging

from tenant_schema.domain.collections import (
    COLLECTION_ACCOUNTS,
    COLLECTION_APPLICATIONS,
    COLLECTION_ASSIGNMENTS,
    COLLECTION_CONTACTS,
    COLLECTION_COUNTERS,
    COLLECTION_DEALS,
    COLLECTION_JOB_BOARD_POSTS,
    COLLECTION_JOB_ORDERS,
    COLLECTION_LOCATIONS,
    COLLECTION_MONITORING,
    COLLECTION_SETTINGS,
    COLLECTION_TASKS,
    COLLECTION_TENANTS,
    COLLECTION_USER_GROUPS,
    COLLECTION_USERS,
    DOC_MONITORING_EVENTS,
    DOC_SETTINGS_CONFIG,
    DOC_SETTINGS_FLEX,
    DOC_SETTINGS_MAIN,
)
from tenant_schema.domain.counters import JOB_ORDER_NUMBER
from tenant_schema.domain.exceptions import InvalidPathError

logger = logging.getLogger(__name__)

TENANT_ROOT_PREFIX = f"{COLLECTION_TENANTS}/"
USER_ROOT_PREFIX = f"{COLLECTION_USERS}/"
RECRUITER_LEGACY_PREFIX = "recruiter_"


def _join(*segments: str) -> str:
    return "/".join(segments)


class CanonicalPaths:
    """Segment builders for every canonical collection and document path."""

    # Roots
    @staticmethod
    def tenant(tenant_id: str) -> str:
        return _join(COLLECTION_TENANTS, tenant_id)

    @staticmethod
    def user(user_id: str) -> str:
        return _join(COLLECTION_USERS, user_id)

    # Accounts (CRM companies) and their nested containers
    @staticmethod
    def accounts(tenant_id: str) -> str:
        return _join(CanonicalPaths.tenant(tenant_id), COLLECTION_ACCOUNTS)

    @staticmethod
    def account(tenant_id: str, account_id: str) -> str:
        return _join(CanonicalPaths.accounts(tenant_id), account_id)

    @staticmethod
    def account_locations(tenant_id: str, account_id: str) -> str:
        return _join(CanonicalPaths.account(tenant_id, account_id), COLLECTION_LOCATIONS)

    @staticmethod
    def account_location(tenant_id: str, account_id: str, location_id: str) -> str:
        return _join(CanonicalPaths.account_locations(tenant_id, account_id), location_id)

    @staticmethod
    def account_contacts(tenant_id: str, account_id: str) -> str:
        return _join(CanonicalPaths.account(tenant_id, account_id), COLLECTION_CONTACTS)

    @staticmethod
    def account_deals(tenant_id: str, account_id: str) -> str:
        return _join(CanonicalPaths.account(tenant_id, account_id), COLLECTION_DEALS)

    # Recruiting
    @staticmethod
    def job_orders(tenant_id: str) -> str:
        return _join(CanonicalPaths.tenant(tenant_id), COLLECTION_JOB_ORDERS)

    @staticmethod
    def job_order(tenant_id: str, job_order_id: str) -> str:
        return _join(CanonicalPaths.job_orders(tenant_id), job_order_id)

    @staticmethod
    def job_board_posts(tenant_id: str) -> str:
        return _join(CanonicalPaths.tenant(tenant_id), COLLECTION_JOB_BOARD_POSTS)

    @staticmethod
    def job_board_post(tenant_id: str, post_id: str) -> str:
        return _join(CanonicalPaths.job_board_posts(tenant_id), post_id)

    @staticmethod
    def applications(tenant_id: str) -> str:
        return _join(CanonicalPaths.tenant(tenant_id), COLLECTION_APPLICATIONS)

    @staticmethod
    def application(tenant_id: str, application_id: str) -> str:
        return _join(CanonicalPaths.applications(tenant_id), application_id)

    @staticmethod
    def assignments(tenant_id: str) -> str:
        return _join(CanonicalPaths.tenant(tenant_id), COLLECTION_ASSIGNMENTS)

    @staticmethod
    def assignment(tenant_id: str, assignment_id: str) -> str:
        return _join(CanonicalPaths.assignments(tenant_id), assignment_id)

    # Tenant administration
    @staticmethod
    def user_groups(tenant_id: str) -> str:
        return _join(CanonicalPaths.tenant(tenant_id), COLLECTION_USER_GROUPS)

    @staticmethod
    def user_group(tenant_id: str, group_id: str) -> str:
        return _join(CanonicalPaths.user_groups(tenant_id), group_id)

    @staticmethod
    def tasks(tenant_id: str) -> str:
        return _join(CanonicalPaths.tenant(tenant_id), COLLECTION_TASKS)

    @staticmethod
    def task(tenant_id: str, task_id: str) -> str:
        return _join(CanonicalPaths.tasks(tenant_id), task_id)

    @staticmethod
    def counters(tenant_id: str) -> str:
        return _join(CanonicalPaths.tenant(tenant_id), COLLECTION_COUNTERS)

    @staticmethod
    def counter(tenant_id: str, counter_id: str) -> str:
        return _join(CanonicalPaths.counters(tenant_id), counter_id)

    @staticmethod
    def job_order_number_counter(tenant_id: str) -> str:
        return CanonicalPaths.counter(tenant_id, JOB_ORDER_NUMBER.counter_id)

    @staticmethod
    def settings(tenant_id: str) -> str:
        return _join(CanonicalPaths.tenant(tenant_id), COLLECTION_SETTINGS)

    @staticmethod
    def settings_config(tenant_id: str) -> str:
        return _join(CanonicalPaths.settings(tenant_id), DOC_SETTINGS_CONFIG)

    @staticmethod
    def settings_main(tenant_id: str) -> str:
        return _join(CanonicalPaths.settings(tenant_id), DOC_SETTINGS_MAIN)

    @staticmethod
    def settings_flex(tenant_id: str) -> str:
        return _join(CanonicalPaths.settings(tenant_id), DOC_SETTINGS_FLEX)

    @staticmethod
    def monitoring(tenant_id: str) -> str:
        return _join(CanonicalPaths.tenant(tenant_id), COLLECTION_MONITORING)

    @staticmethod
    def monitoring_events(tenant_id: str) -> str:
        return _join(CanonicalPaths.monitoring(tenant_id), DOC_MONITORING_EVENTS)


p = CanonicalPaths()


def is_recruiter_legacy(path: str) -> bool:
    """True if any segment of the path is a ``recruiter_*`` container."""
    return any(
        segment.startswith(RECRUITER_LEGACY_PREFIX) for segment in path.split("/")
    )


def is_top_level_job_orders(path: str) -> bool:
    """True for the pre-tenant-scoping root ``jobOrders`` collection."""
    if path != COLLECTION_JOB_ORDERS and not path.startswith(f"{COLLECTION_JOB_ORDERS}/"):
        return False
    return COLLECTION_TENANTS not in path.split("/")


def is_missing_tenant_id(path: str) -> bool:
    """True if the path is rooted at neither a tenant nor a user."""
    return not (path.startswith(TENANT_ROOT_PREFIX) or path.startswith(USER_ROOT_PREFIX))


def warn_legacy_usage(path: str, context: str) -> None:
    """Log a warning for each legacy shape the path has. Never raises."""
    if is_recruiter_legacy(path):
        logger.warning("[%s] recruiter_* legacy collection in use: %s", context, path)
    if is_top_level_job_orders(path):
        logger.warning("[%s] top-level jobOrders collection in use: %s", context, path)
    if is_missing_tenant_id(path):
        logger.warning("[%s] path is not scoped to a tenant or user: %s", context, path)


def require_tenant_id(path: str, tenant_id: str) -> str:
    """Return path unchanged if it contains tenant_id.

    Raises:
        InvalidPathError: If tenant_id does not occur in path.
    """
    if tenant_id not in path:
        raise InvalidPathError(path, tenant_id)
    return path


def validate_canonical(path: str) -> bool:
    """True if path is rooted at a tenant or user and has no legacy shape."""
    if is_missing_tenant_id(path):
        return False
    if is_recruiter_legacy(path) or is_top_level_job_orders(path):
        return False
    return True
