"""
PermissionGraph resolution against a seeded SQLite database.

Layout used by most tests:

    module SEC (active)   -> USR, ROL, OLD
    module ARC (inactive) -> ROL
    RPT is bound to no module; OLD is an inactive form.

    Admin: USR full, ROL read, OLD full, RPT read
    Users: USR read + USR create-only (two rows), ROL create-only
"""
from datetime import datetime, timezone

import pytest

from rbac_admin.models import (
    Form,
    FormModule,
    Module,
    Permission,
    Rol,
    RolFormPermission,
    RolUser,
    User,
)
from rbac_admin.schemas.access import Capabilities
from rbac_admin.services.permission_graph import PermissionGraph


@pytest.fixture
async def graph_data(session):
    roles = {
        "admin": Rol(name="Admin", active=True),
        "users": Rol(name="Users", active=True),
        "inactive": Rol(name="Dormant", active=False),
    }
    forms = {
        "USR": Form(name="Users", code="USR", active=True),
        "ROL": Form(name="Roles", code="ROL", active=True),
        "OLD": Form(name="Legacy", code="OLD", active=False),
        "RPT": Form(name="Reports", code="RPT", active=True),
    }
    modules = {
        "SEC": Module(code="SEC", name="Security", active=True),
        "ARC": Module(code="ARC", name="Archive", active=False),
    }
    permissions = {
        "full": Permission(can_read=True, can_create=True, can_update=True, can_delete=True),
        "read": Permission(can_read=True, can_create=False, can_update=False, can_delete=False),
        "create": Permission(can_read=False, can_create=True, can_update=False, can_delete=False),
    }
    user = User(name="Ana", email="ana@example.com", password="hash")
    session.add_all([*roles.values(), *forms.values(), *modules.values(), *permissions.values(), user])
    await session.commit()

    session.add_all(
        [
            FormModule(module_id=modules["SEC"].id, form_id=forms["USR"].id),
            FormModule(module_id=modules["SEC"].id, form_id=forms["ROL"].id),
            FormModule(module_id=modules["SEC"].id, form_id=forms["OLD"].id),
            FormModule(module_id=modules["ARC"].id, form_id=forms["ROL"].id),
        ]
    )

    def grant(rol: str, form: str, permission: str) -> RolFormPermission:
        return RolFormPermission(
            rol_id=roles[rol].id, form_id=forms[form].id, permission_id=permissions[permission].id
        )

    session.add_all(
        [
            grant("admin", "USR", "full"),
            grant("admin", "ROL", "read"),
            grant("admin", "OLD", "full"),
            grant("admin", "RPT", "read"),
            grant("users", "USR", "read"),
            grant("users", "USR", "create"),
            grant("users", "ROL", "create"),
            grant("inactive", "USR", "full"),
        ]
    )
    await session.commit()
    return {
        "roles": roles,
        "forms": forms,
        "modules": modules,
        "permissions": permissions,
        "user": user,
    }


class TestEffectivePermission:
    @pytest.mark.anyio
    async def test_duplicate_rows_are_or_combined(self, session, graph_data):
        graph = PermissionGraph(session)

        combined = await graph.effective_permission(
            graph_data["roles"]["users"].id, graph_data["forms"]["USR"].id
        )

        assert combined == Capabilities(can_read=True, can_create=True)

    @pytest.mark.anyio
    async def test_no_grant_is_all_false(self, session, graph_data):
        graph = PermissionGraph(session)

        combined = await graph.effective_permission(
            graph_data["roles"]["users"].id, graph_data["forms"]["RPT"].id
        )

        assert combined == Capabilities()

    @pytest.mark.anyio
    async def test_inactive_rol_has_no_effective_permission(self, session, graph_data):
        graph = PermissionGraph(session)

        combined = await graph.effective_permission(
            graph_data["roles"]["inactive"].id, graph_data["forms"]["USR"].id
        )

        assert combined == Capabilities()


class TestResolveAccess:
    @pytest.mark.anyio
    async def test_admin_tree_groups_visible_forms(self, session, graph_data):
        graph = PermissionGraph(session)

        access = await graph.resolve_access(graph_data["roles"]["admin"].id)

        assert [module.code for module in access.modules] == ["SEC"]
        sec = access.modules[0]
        assert [form.code for form in sec.forms] == ["USR", "ROL"]
        usr, rol = sec.forms
        assert (usr.can_read, usr.can_create, usr.can_update, usr.can_delete) == (True, True, True, True)
        assert (rol.can_read, rol.can_create, rol.can_update, rol.can_delete) == (True, False, False, False)
        assert [form.code for form in access.ungrouped_forms] == ["RPT"]

    @pytest.mark.anyio
    async def test_form_without_read_is_hidden(self, session, graph_data):
        graph = PermissionGraph(session)

        access = await graph.resolve_access(graph_data["roles"]["users"].id)

        assert [module.code for module in access.modules] == ["SEC"]
        assert [form.code for form in access.modules[0].forms] == ["USR"]
        usr = access.modules[0].forms[0]
        assert usr.can_read is True
        assert usr.can_create is True
        assert usr.can_update is False
        assert access.ungrouped_forms == []

    @pytest.mark.anyio
    async def test_unknown_rol_resolves_to_empty_access(self, session, graph_data):
        access = await PermissionGraph(session).resolve_access(999)

        assert access.rol_id == 999
        assert access.is_empty

    @pytest.mark.anyio
    async def test_inactive_rol_resolves_to_empty_access(self, session, graph_data):
        access = await PermissionGraph(session).resolve_access(graph_data["roles"]["inactive"].id)

        assert access.is_empty

    @pytest.mark.anyio
    async def test_rol_without_grants_resolves_to_empty_access(self, session):
        rol = Rol(name="Fresh", active=True)
        session.add(rol)
        await session.commit()

        access = await PermissionGraph(session).resolve_access(rol.id)

        assert access.is_empty

    @pytest.mark.anyio
    async def test_soft_deleted_grant_is_ignored(self, session, graph_data):
        admin_id = graph_data["roles"]["admin"].id
        rpt_id = graph_data["forms"]["RPT"].id
        graph = PermissionGraph(session)
        details = await graph.get_permissions_by_rol(admin_id)
        rpt_grant = next(detail for detail in details if detail.form_id == rpt_id)

        row = await session.get(RolFormPermission, rpt_grant.id)
        row.mark_deleted(datetime.now(timezone.utc))
        await session.commit()

        access = await graph.resolve_access(admin_id)
        assert access.ungrouped_forms == []

    @pytest.mark.anyio
    async def test_admin_users_scenario(self, session):
        admin = Rol(name="Admin", active=True)
        users_form = Form(name="Users", code="USR", active=True)
        full = Permission(can_read=True, can_create=True, can_update=True, can_delete=True)
        session.add_all([admin, users_form, full])
        await session.commit()
        session.add(RolFormPermission(rol_id=admin.id, form_id=users_form.id, permission_id=full.id))
        await session.commit()

        access = await PermissionGraph(session).resolve_access(admin.id)

        assert access.modules == []
        assert len(access.ungrouped_forms) == 1
        form = access.ungrouped_forms[0]
        assert form.code == "USR"
        assert form.can_read and form.can_create and form.can_update and form.can_delete


class TestGraphTraversal:
    @pytest.mark.anyio
    async def test_permissions_by_rol_include_form_details(self, session, graph_data):
        details = await PermissionGraph(session).get_permissions_by_rol(graph_data["roles"]["admin"].id)

        assert [detail.form_code for detail in details] == ["USR", "ROL", "OLD", "RPT"]
        old = details[2]
        assert old.form_active is False
        assert old.can_delete is True

    @pytest.mark.anyio
    async def test_forms_for_module(self, session, graph_data):
        forms = await PermissionGraph(session).get_forms_for_module(graph_data["modules"]["SEC"].id)

        assert [form.code for form in forms] == ["USR", "ROL", "OLD"]

    @pytest.mark.anyio
    async def test_modules_for_form(self, session, graph_data):
        modules = await PermissionGraph(session).get_modules_for_form(graph_data["forms"]["ROL"].id)

        assert [module.code for module in modules] == ["SEC", "ARC"]

    @pytest.mark.anyio
    async def test_unbound_form_has_no_modules(self, session, graph_data):
        modules = await PermissionGraph(session).get_modules_for_form(graph_data["forms"]["RPT"].id)

        assert modules == []


class TestUserAccess:
    @pytest.mark.anyio
    async def test_roles_for_user_skip_inactive_and_removed_links(self, session, graph_data):
        user = graph_data["user"]
        roles = graph_data["roles"]
        removed = RolUser(user_id=user.id, rol_id=roles["admin"].id, delete_at=datetime.now(timezone.utc))
        session.add_all(
            [
                RolUser(user_id=user.id, rol_id=roles["users"].id),
                RolUser(user_id=user.id, rol_id=roles["inactive"].id),
                removed,
            ]
        )
        await session.commit()

        assigned = await PermissionGraph(session).get_roles_for_user(user.id)

        assert [rol.name for rol in assigned] == ["Users"]

    @pytest.mark.anyio
    async def test_user_access_is_union_of_roles(self, session, graph_data):
        user = graph_data["user"]
        roles = graph_data["roles"]
        session.add_all(
            [
                RolUser(user_id=user.id, rol_id=roles["admin"].id),
                RolUser(user_id=user.id, rol_id=roles["users"].id),
            ]
        )
        await session.commit()

        access = await PermissionGraph(session).resolve_user_access(user.id)

        assert access.rol_ids == [roles["admin"].id, roles["users"].id]
        assert [form.code for form in access.modules[0].forms] == ["USR", "ROL"]
        usr = access.modules[0].forms[0]
        assert usr.can_delete is True
        rol = access.modules[0].forms[1]
        assert rol.can_read is True
        assert rol.can_create is True
        assert [form.code for form in access.ungrouped_forms] == ["RPT"]

    @pytest.mark.anyio
    async def test_user_without_roles_has_empty_access(self, session, graph_data):
        access = await PermissionGraph(session).resolve_user_access(graph_data["user"].id)

        assert access.rol_ids == []
        assert access.modules == []
        assert access.ungrouped_forms == []
