"""Demo data for the local gateway — roles, an admin account and a few master records.

Idempotent: nothing is written once the ``roles`` table has rows.
"""

import logging

from moldops.application.interfaces import DataGateway
from moldops.application.catalog.entities import (
    ADMIN,
    FINANCE_MANAGER,
    MAINTENANCE_STAFF,
    PRODUCTION_MANAGER,
    PRODUCTION_STAFF,
    PURCHASE_MANAGER,
    QUALITY_INSPECTOR,
    SALES_STAFF,
    WAREHOUSE_STAFF,
)
from moldops.infrastructure.repositories.local_auth_gateway import LocalAuthGateway

logger = logging.getLogger(__name__)

ROLE_NAMES = (
    ADMIN,
    PRODUCTION_MANAGER,
    PRODUCTION_STAFF,
    WAREHOUSE_STAFF,
    SALES_STAFF,
    QUALITY_INSPECTOR,
    PURCHASE_MANAGER,
    FINANCE_MANAGER,
    MAINTENANCE_STAFF,
)

SAMPLE_ROWS: dict[str, list[dict]] = {
    "machines": [
        {
            "machine_code": "INJ-001",
            "name": "Haitian MA1600",
            "machine_type": "injection",
            "brand": "Haitian",
            "tonnage": 160,
            "location": "Hall A",
            "status": "active",
        },
        {
            "machine_code": "INJ-002",
            "name": "Engel Victory 200",
            "machine_type": "injection",
            "brand": "Engel",
            "tonnage": 200,
            "location": "Hall A",
            "status": "maintenance",
        },
    ],
    "products": [
        {"product_code": "PRD-001", "name": "Bottle Cap 28mm", "category": "caps", "status": "active"},
        {"product_code": "PRD-002", "name": "Food Container 500ml", "category": "containers", "status": "active"},
    ],
    "raw_materials": [
        {
            "material_code": "RM-PP-01",
            "name": "Polypropylene Homopolymer",
            "category": "resin",
            "unit_of_measure": "kg",
            "current_stock": 1200,
            "minimum_stock": 500,
        },
    ],
    "customers": [
        {
            "customer_code": "CUST-001",
            "company_name": "PT. Sumber Makmur",
            "contact_person": "Budi Santoso",
            "city": "Jakarta",
            "country": "Indonesia",
            "customer_type": "regular",
            "status": "active",
        },
    ],
}


async def seed_demo_data(
    data_gateway: DataGateway,
    auth_gateway: LocalAuthGateway,
    admin_email: str,
    admin_password: str,
) -> bool:
    """Write the demo data set unless it is already there; returns whether it wrote."""
    if await data_gateway.count("roles") > 0:
        logger.debug("Demo data already present")
        return False

    role_ids: dict[str, str] = {}
    for name in ROLE_NAMES:
        row = await data_gateway.insert(
            "roles",
            {"name": name, "description": name.replace("_", " ").title(), "is_active": True},
        )
        role_ids[name] = row["id"]

    admin = await auth_gateway.create_user(admin_email, admin_password, metadata={"first_name": "Admin"})
    await data_gateway.insert(
        "users",
        {
            "id": admin.id,
            "username": "admin",
            "email": admin.email,
            "first_name": "System",
            "last_name": "Administrator",
            "department": "IT",
            "is_active": True,
        },
    )
    await data_gateway.insert("user_roles", {"user_id": admin.id, "role_id": role_ids[ADMIN]})

    for table, rows in SAMPLE_ROWS.items():
        for row in rows:
            await data_gateway.insert(table, row)

    logger.info("Seeded demo data; admin account %s", admin_email)
    return True
