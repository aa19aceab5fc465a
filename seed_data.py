"""Seed data script for the CSR Dashboard database.

Populates the database with demo data for development: the company record,
departments, roles, three demo accounts and the program / stakeholder
reference data. The script is idempotent: every record is looked up by its
unique key before inserting.

Usage (from the project root):
    python seed_data.py
"""

from __future__ import annotations

import json
import os
import sys

# Ensure the app package is importable when running from the project root
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from app.database import Base, SessionLocal, engine  # noqa: E402
from app.models import (  # noqa: E402
    CategoryProgram,
    Company,
    Department,
    Role,
    StakeholderCategory,
    TypeProgram,
    User,
)
from app.services.seed_service import seed_defaults  # noqa: E402
from app.utils.security import hash_password  # noqa: E402

DEMO_PASSWORD = "password123"


def _get_or_add(session, model, key: str, values: dict):
    """Return the row whose *key* column equals ``values[key]``, adding it if absent."""
    instance = session.query(model).filter(getattr(model, key) == values[key]).first()
    if instance is not None:
        print(f"  [SKIP] {model.__name__} '{values[key]}' already exists.")
        return instance
    instance = model(**values)
    session.add(instance)
    session.flush()
    print(f"  [OK] {model.__name__} '{values[key]}' inserted.")
    return instance


# ---------------------------------------------------------------------------
# Seed functions
# ---------------------------------------------------------------------------


def seed_company(session) -> Company:
    return _get_or_add(
        session,
        Company,
        "code",
        {
            "name": "Sustainesia Digital",
            "code": "MAIN",
            "address": "Jl. Sudirman No.1, Jakarta Pusat",
            "phone": "+62-21-12345678",
            "email": "info@sustainesia.com",
            "description": "Leading company in sustainable digital solutions with strong CSR commitment",
            "status": "active",
        },
    )


def seed_departments(session) -> dict[str, Department]:
    rows = [
        ("CSR & Community Development", "CSR", "Department responsible for Corporate Social Responsibility programs"),
        ("Human Resources", "HR", "Human resource management and employee development"),
        ("Finance", "FIN", "Financial management and budget control"),
    ]
    return {
        code: _get_or_add(
            session, Department, "code", {"name": name, "code": code, "description": description}
        )
        for name, code, description in rows
    }


def seed_roles(session) -> dict[str, Role]:
    rows = [
        ("Super Admin", "super_admin", "Full system access with all permissions", ["*"]),
        (
            "Admin",
            "admin",
            "Administrative access to manage CSR programs",
            ["program.*", "stakeholder.*", "budget.*", "report.*"],
        ),
        (
            "Manager",
            "manager",
            "Manage programs and view reports",
            ["program.read", "program.update", "stakeholder.read", "budget.read", "report.read"],
        ),
        ("User", "user", "Basic user access to view programs", ["program.read", "stakeholder.read"]),
    ]
    return {
        level: _get_or_add(
            session,
            Role,
            "name",
            {
                "name": name,
                "level": level,
                "description": description,
                "permissions": json.dumps(permissions),
            },
        )
        for name, level, description, permissions in rows
    }


def seed_users(session, departments: dict[str, Department], roles: dict[str, Role]) -> None:
    password_hash = hash_password(DEMO_PASSWORD)
    rows = [
        ("admin@sustainesia.com", "Admin Sustainesia", "CSR Administrator", "super_admin"),
        ("manager@sustainesia.com", "CSR Manager", "Program Manager", "manager"),
        ("demo@sustainesia.com", "Demo User", "Staff", "user"),
    ]
    for email, name, position, level in rows:
        _get_or_add(
            session,
            User,
            "email",
            {
                "email": email,
                "name": name,
                "password_hash": password_hash,
                "position": position,
                "status": "active",
                "department_id": departments["CSR"].id,
                "role_id": roles[level].id,
            },
        )


def seed_program_reference_data(session) -> None:
    for name in ("Pendidikan", "Kesehatan", "Lingkungan", "Ekonomi", "Sosial"):
        _get_or_add(session, CategoryProgram, "name", {"name": name})
    for name in ("Strategis", "Bantuan", "Beasiswa", "Pelatihan", "Infrastruktur"):
        _get_or_add(session, TypeProgram, "name", {"name": name})


def seed_stakeholder_categories(session) -> None:
    rows = [
        ("Community", "Local community and public", "community"),
        ("NGO/Yayasan", "Non-Government Organizations and foundations", "external"),
        ("Pemerintah", "Government institutions", "government"),
        ("Internal", "Internal company stakeholders", "internal"),
    ]
    for name, description, category_type in rows:
        _get_or_add(
            session,
            StakeholderCategory,
            "name",
            {"name": name, "description": description, "type": category_type},
        )


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------


def main() -> None:
    """Run the complete seed process within a single database transaction."""
    print("=" * 60)
    print("  CSR Dashboard — Seed Data Script")
    print("=" * 60)

    Base.metadata.create_all(bind=engine)

    session = SessionLocal()
    try:
        print("\n[1/6] Company...")
        seed_company(session)

        print("\n[2/6] Departments...")
        departments = seed_departments(session)

        print("\n[3/6] Roles...")
        roles = seed_roles(session)

        print("\n[4/6] Users...")
        seed_users(session, departments, roles)

        print("\n[5/6] Program categories and types...")
        seed_program_reference_data(session)

        print("\n[6/6] Stakeholder categories...")
        seed_stakeholder_categories(session)

        session.commit()

        # Defaults used by self-registration; reuses the rows above when present
        seed_defaults(session)

        print("\n" + "=" * 60)
        print("  Seed completed successfully.")
        print(f"  Demo accounts use the password '{DEMO_PASSWORD}'.")
        print("=" * 60)

    except Exception as exc:
        session.rollback()
        print("\n[ERROR] Seed failed — transaction rolled back.")
        print(f"  Detail: {exc}")
        raise
    finally:
        session.close()


if __name__ == "__main__":
    main()
