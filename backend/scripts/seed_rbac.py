"""
Seed data for the RBAC administration backend.
Run once after the initial migration; re-running skips rows that already exist.

Creates the Admin rol, the administration forms grouped into modules, one
full-access permission set and the Admin grants over every seeded form.

Usage:
    python -m scripts.seed_rbac
"""
import asyncio
import sys
import os

# Add parent directory to path to import rbac_admin modules
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from rbac_admin.crud.assignments import RolFormPermissionStore
from rbac_admin.crud.catalog import FormModuleStore, FormStore, ModuleStore, RolStore
from rbac_admin.database import AsyncSessionLocal
from rbac_admin.schemas.assignments import RolFormPermissionDto
from rbac_admin.schemas.catalog import FormDto, FormModuleDto, ModuleDto, PermissionDto, RolDto
from rbac_admin.services.assignments import build_rol_form_permission_service
from rbac_admin.services.catalog import (
    build_form_module_service,
    build_form_service,
    build_module_service,
    build_permission_service,
    build_rol_service,
)


ADMIN_ROL = {
    "name": "Admin",
    "description": "Full access to every administration form",
}

DEFAULT_MODULES = [
    {"code": "SEC", "name": "Security", "description": "Users, roles and permissions"},
    {"code": "CAT", "name": "Catalog", "description": "Forms and modules"},
    {"code": "HR", "name": "Human resources", "description": "Workers and their logins"},
]

DEFAULT_FORMS = [
    {"code": "USR", "name": "Users"},
    {"code": "ROL", "name": "Roles"},
    {"code": "PER", "name": "Permissions"},
    {"code": "RFP", "name": "Role permissions"},
    {"code": "RUS", "name": "User roles"},
    {"code": "FRM", "name": "Forms"},
    {"code": "MOD", "name": "Modules"},
    {"code": "FMD", "name": "Module forms"},
    {"code": "WRK", "name": "Workers"},
    {"code": "WLG", "name": "Worker logins"},
]

MODULE_FORMS = {
    "SEC": ["USR", "ROL", "PER", "RFP", "RUS"],
    "CAT": ["FRM", "MOD", "FMD"],
    "HR": ["WRK", "WLG"],
}


async def seed_rbac():
    """Seed the Admin rol with full access over the administration forms."""
    async with AsyncSessionLocal() as session:
        rol_store = RolStore(session)
        form_store = FormStore(session)
        module_store = ModuleStore(session)
        form_module_store = FormModuleStore(session)
        grant_store = RolFormPermissionStore(session)

        print("Seeding modules...")
        module_map = {}
        module_service = build_module_service(session)
        for module_data in DEFAULT_MODULES:
            existing = await module_store.get_by_code(module_data["code"])
            if existing:
                print(f"  Module '{module_data['code']}' already exists, skipping...")
                module_map[module_data["code"]] = existing.id
                continue
            module = await module_service.create(ModuleDto(**module_data))
            module_map[module_data["code"]] = module.id
            print(f"  ✓ Created module: {module_data['code']}")

        print("\nSeeding forms...")
        form_map = {}
        form_service = build_form_service(session)
        for form_data in DEFAULT_FORMS:
            existing = await form_store.get_by_code(form_data["code"])
            if existing:
                print(f"  Form '{form_data['code']}' already exists, skipping...")
                form_map[form_data["code"]] = existing.id
                continue
            form = await form_service.create(FormDto(**form_data))
            form_map[form_data["code"]] = form.id
            print(f"  ✓ Created form: {form_data['code']}")

        print("\nBinding forms to modules...")
        form_module_service = build_form_module_service(session)
        for module_code, form_codes in MODULE_FORMS.items():
            module_id = module_map[module_code]
            for form_code in form_codes:
                form_id = form_map[form_code]
                if await form_module_store.get_by_module_and_form(module_id, form_id):
                    continue
                await form_module_service.create(
                    FormModuleDto(module_id=module_id, form_id=form_id)
                )
            print(f"  ✓ Bound {len(form_codes)} forms to '{module_code}'")

        print("\nSeeding Admin rol...")
        rol = await rol_store.first_where(name=ADMIN_ROL["name"])
        if rol:
            print(f"  Rol '{ADMIN_ROL['name']}' already exists, skipping...")
            rol_id = rol.id
        else:
            created = await build_rol_service(session).create(RolDto(**ADMIN_ROL))
            rol_id = created.id
            print(f"  ✓ Created rol: {ADMIN_ROL['name']}")

        print("\nGranting full access...")
        full_access_id = None
        grant_service = build_rol_form_permission_service(session)
        granted = 0
        for form_code, form_id in form_map.items():
            if await grant_store.list_by_rol_and_form(rol_id, form_id):
                print(f"  Grant on '{form_code}' already exists, skipping...")
                continue
            if full_access_id is None:
                full_access = await build_permission_service(session).create(
                    PermissionDto(can_read=True, can_create=True, can_update=True, can_delete=True)
                )
                full_access_id = full_access.id
            await grant_service.create(
                RolFormPermissionDto(
                    rol_id=rol_id, form_id=form_id, permission_id=full_access_id
                )
            )
            granted += 1
        print(f"  ✓ Granted {granted} forms to '{ADMIN_ROL['name']}'")

        print("\n✅ RBAC seeding completed successfully!")


if __name__ == "__main__":
    asyncio.run(seed_rbac())
