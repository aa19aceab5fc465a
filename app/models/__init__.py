"""SQLAlchemy models package for the CSR Dashboard.

Importing all models here ensures that SQLAlchemy's mapper registry is
populated before ``Base.metadata.create_all()`` runs.
The import order follows the foreign-key dependency graph so that parent
tables are always registered before their children.

Usage from other modules:
    from app.models import User, Department
"""

# Access control and organisation
from app.models.role import Role  # noqa: F401
from app.models.department import Department  # noqa: F401
from app.models.user import User  # noqa: F401
from app.models.company import Company  # noqa: F401

# Master / reference data
from app.models.category_program import CategoryProgram  # noqa: F401
from app.models.type_program import TypeProgram  # noqa: F401
from app.models.stakeholder_category import StakeholderCategory  # noqa: F401

# Domain records that reference master data
from app.models.stakeholder import Stakeholder  # noqa: F401
from app.models.program import Program  # noqa: F401
from app.models.sub_program import SubProgram  # noqa: F401
from app.models.program_stakeholder import ProgramStakeholder  # noqa: F401
from app.models.activity import Activity  # noqa: F401
from app.models.budget import Budget  # noqa: F401

__all__ = [
    "Role",
    "Department",
    "User",
    "Company",
    "CategoryProgram",
    "TypeProgram",
    "StakeholderCategory",
    "Stakeholder",
    "Program",
    "SubProgram",
    "ProgramStakeholder",
    "Activity",
    "Budget",
]
