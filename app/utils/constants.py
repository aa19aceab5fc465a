"""
Application-wide constants for the CSR Dashboard.

Defines domain enumerations, default records provisioned at first run,
and the path rules used by the auth gate.
"""

from typing import Final

# ---------------------------------------------------------------------------
# Role levels
# ---------------------------------------------------------------------------

ROLE_LEVELS: Final[list[str]] = [
    "super_admin",
    "admin",
    "manager",
    "user",
]

DEFAULT_ROLE_LEVEL: Final[str] = "user"

# ---------------------------------------------------------------------------
# Account status
# ---------------------------------------------------------------------------

USER_STATUSES: Final[list[str]] = ["active", "inactive"]
STATUS_ACTIVE: Final[str] = "active"

# ---------------------------------------------------------------------------
# Stakeholder category kinds
# ---------------------------------------------------------------------------

STAKEHOLDER_CATEGORY_TYPES: Final[list[str]] = [
    "internal",
    "external",
    "government",
    "community",
    "ngo",
]

# ---------------------------------------------------------------------------
# Program, sub-program and activity vocabularies
# ---------------------------------------------------------------------------

PROGRAM_STATUSES: Final[list[str]] = [
    "draft",
    "approved",
    "active",
    "completed",
    "cancelled",
]
PROGRAM_DEFAULT_STATUS: Final[str] = "draft"

# Statuses offered by the program dropdown of other forms
PROGRAM_SELECTABLE_STATUSES: Final[tuple[str, ...]] = ("approved", "active")

PRIORITIES: Final[list[str]] = ["low", "medium", "high", "critical"]
DEFAULT_PRIORITY: Final[str] = "medium"

SUB_PROGRAM_STATUSES: Final[list[str]] = ["planned", "active", "completed", "cancelled"]
SUB_PROGRAM_SELECTABLE_STATUSES: Final[tuple[str, ...]] = ("planned", "active")

ACTIVITY_TYPES: Final[list[str]] = [
    "training",
    "workshop",
    "donation",
    "campaign",
    "construction",
    "other",
]
ACTIVITY_STATUSES: Final[list[str]] = ["planned", "ongoing", "completed", "cancelled"]

# ---------------------------------------------------------------------------
# Stakeholder vocabularies
# ---------------------------------------------------------------------------

STAKEHOLDER_TYPES: Final[list[str]] = [
    "individual",
    "organization",
    "government",
    "community",
]
STAKEHOLDER_LEVELS: Final[list[str]] = ["low", "medium", "high"]
STAKEHOLDER_RELATIONSHIPS: Final[list[str]] = ["supporter", "neutral", "opponent"]

# ---------------------------------------------------------------------------
# Budget vocabularies
# ---------------------------------------------------------------------------

BUDGET_TYPES: Final[list[str]] = ["program", "project", "activity"]
BUDGET_CATEGORIES: Final[list[str]] = [
    "operational",
    "capital",
    "personnel",
    "materials",
    "services",
]
BUDGET_STATUSES: Final[list[str]] = ["proposed", "approved", "allocated", "spent"]
BUDGET_CURRENCIES: Final[list[str]] = ["IDR", "USD", "EUR"]
DEFAULT_CURRENCY: Final[str] = "IDR"

# ---------------------------------------------------------------------------
# Records provisioned by the seeding step
# ---------------------------------------------------------------------------

DEFAULT_ROLE: Final[dict[str, object]] = {
    "name": "User",
    "description": "Default user role",
    "level": DEFAULT_ROLE_LEVEL,
    "permissions": ["view_programs", "view_stakeholders"],
}

DEFAULT_DEPARTMENT: Final[dict[str, str]] = {
    "name": "General",
    "code": "GEN",
    "description": "General department",
}

DEFAULT_COMPANY: Final[dict[str, str]] = {
    "name": "PT CSR Dashboard",
    "code": "CSR-001",
    "status": "active",
}

# ---------------------------------------------------------------------------
# Auth gate path rules
# ---------------------------------------------------------------------------

# Requests whose path starts with one of these never reach the gate's checks
GATE_BYPASS_PREFIXES: Final[tuple[str, ...]] = (
    "/api",
    "/_next/static",
    "/_next/image",
    "/favicon.ico",
    "/docs",
    "/redoc",
    "/openapi.json",
)

PUBLIC_PATH_PREFIX: Final[str] = "/auth"
SIGN_IN_PATH: Final[str] = "/auth/sign-in"
HOME_PATH: Final[str] = "/"

# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

MIN_PASSWORD_LENGTH: Final[int] = 8
# bcrypt only hashes the first 72 bytes and rejects longer input
MAX_PASSWORD_BYTES: Final[int] = 72

# ---------------------------------------------------------------------------
# Permission catalogue offered by the role form
# ---------------------------------------------------------------------------


def _crud_permissions(prefix: str, category: str, noun: str) -> list[dict[str, str]]:
    return [
        {
            "id": f"{prefix}.{action}",
            "name": f"{label} {noun}",
            "category": category,
            "description": f"Can {label.lower()} {noun.lower()}",
        }
        for action, label in (
            ("view", "View"),
            ("create", "Create"),
            ("edit", "Edit"),
            ("delete", "Delete"),
        )
    ]


PERMISSION_CATALOGUE: Final[list[dict[str, str]]] = [
    {
        "id": "dashboard.view",
        "name": "View Dashboard",
        "category": "Dashboard",
        "description": "Can view dashboard and statistics",
    },
    *_crud_permissions("programs", "Programs", "Programs"),
    *_crud_permissions("stakeholders", "Stakeholders", "Stakeholders"),
    *_crud_permissions("projects", "Sub Programs", "Sub Programs"),
    *_crud_permissions("activities", "Activities", "Activities"),
    *_crud_permissions("budgets", "Budgets", "Budgets"),
    *_crud_permissions("reports", "Reports", "Reports"),
    {
        "id": "reports.export",
        "name": "Export Reports",
        "category": "Reports",
        "description": "Can export reports to various formats",
    },
    {
        "id": "analytics.view",
        "name": "View Analytics",
        "category": "Analytics",
        "description": "Can view analytics and insights",
    },
    *_crud_permissions("users", "User Management", "Users"),
    *_crud_permissions("roles", "Role Management", "Roles"),
    {
        "id": "master.departments",
        "name": "Manage Departments",
        "category": "Master Data",
        "description": "Can manage department data",
    },
    {
        "id": "master.categories",
        "name": "Manage Categories",
        "category": "Master Data",
        "description": "Can manage program categories",
    },
    {
        "id": "master.types",
        "name": "Manage Types",
        "category": "Master Data",
        "description": "Can manage program types",
    },
    {
        "id": "settings.view",
        "name": "View Settings",
        "category": "Settings",
        "description": "Can view system settings",
    },
    {
        "id": "settings.edit",
        "name": "Edit Settings",
        "category": "Settings",
        "description": "Can edit system settings",
    },
]
