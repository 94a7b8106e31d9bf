"""Firestore collection and document names (schema-in-code).

Firestore has no DDL or migrations. Collections are created automatically
when you first write a document. Use these constants so collection names
stay consistent; build full paths with tenant_schema.domain.paths.
"""

# Partition roots
COLLECTION_TENANTS = "tenants"
COLLECTION_USERS = "users"

# CRM
COLLECTION_ACCOUNTS = "crm_companies"
COLLECTION_LOCATIONS = "locations"
COLLECTION_CONTACTS = "contacts"
COLLECTION_DEALS = "deals"

# Recruiting
COLLECTION_JOB_ORDERS = "jobOrders"
COLLECTION_JOB_BOARD_POSTS = "jobBoardPosts"
COLLECTION_APPLICATIONS = "applications"
COLLECTION_CANDIDATES = "candidates"
COLLECTION_ASSIGNMENTS = "assignments"

# Tenant administration
COLLECTION_USER_GROUPS = "userGroups"
COLLECTION_TASKS = "tasks"
COLLECTION_COUNTERS = "counters"
COLLECTION_SETTINGS = "settings"
COLLECTION_MONITORING = "monitoring"

# Well-known documents
DOC_SETTINGS_CONFIG = "config"
DOC_SETTINGS_MAIN = "main"
DOC_SETTINGS_FLEX = "flex"
DOC_MONITORING_EVENTS = "events"
DOC_CLEANUP_LEASE = "cleanupLease"
