"""
Tests for the generic EntityStore against an in-memory SQLite database.

Covers soft delete visibility, permanent delete, full-replace updates and
the classification of constraint violations.
"""
import pytest

from rbac_admin.crud.assignments import RolFormPermissionStore, RolUserStore
from rbac_admin.crud.catalog import FormModuleStore, FormStore, ModuleStore, PermissionStore, RolStore
from rbac_admin.crud.users import UserStore
from rbac_admin.crud.workers import WorkerLoginStore, WorkerStore
from rbac_admin.errors import IntegrityViolation
from rbac_admin.models import (
    Form,
    FormModule,
    LifecycleState,
    Module,
    Permission,
    Rol,
    RolFormPermission,
    RolUser,
    User,
    Worker,
    WorkerLogin,
)


class TestCreateAndRead:
    @pytest.mark.anyio
    async def test_create_assigns_id_and_server_timestamp(self, session):
        store = RolStore(session)

        rol = await store.create(Rol(name="Admin", description="All access", active=True))

        assert rol.id is not None
        assert rol.created_at is not None
        assert rol.delete_at is None
        assert rol.lifecycle_state is LifecycleState.ACTIVE

    @pytest.mark.anyio
    async def test_get_all_is_ordered_by_id(self, session):
        store = FormStore(session)
        await store.create(Form(name="Users", code="USR", active=True))
        await store.create(Form(name="Roles", code="ROL", active=True))

        forms = await store.get_all()

        assert [form.code for form in forms] == ["USR", "ROL"]

    @pytest.mark.anyio
    async def test_get_by_id_missing_returns_none(self, session):
        assert await RolStore(session).get_by_id(999) is None

    @pytest.mark.anyio
    async def test_narrow_lookup_by_code(self, session):
        store = FormStore(session)
        await store.create(Form(name="Users", code="USR", active=True))

        found = await store.get_by_code("USR")

        assert found is not None
        assert found.name == "Users"
        assert await store.get_by_code("usr") is None


class TestSoftDelete:
    @pytest.mark.anyio
    async def test_soft_deleted_row_is_hidden_but_retained(self, session):
        store = RolStore(session)
        rol = await store.create(Rol(name="Temp", active=True))

        assert await store.delete(rol.id) is True

        assert await store.get_by_id(rol.id) is None
        assert await store.get_all() == []
        retained = await store.get_by_id(rol.id, include_deleted=True)
        assert retained is not None
        assert retained.lifecycle_state is LifecycleState.SOFT_DELETED

    @pytest.mark.anyio
    async def test_second_soft_delete_returns_false(self, session):
        store = RolStore(session)
        rol = await store.create(Rol(name="Temp", active=True))

        assert await store.delete(rol.id) is True
        assert await store.delete(rol.id) is False

    @pytest.mark.anyio
    async def test_delete_without_soft_delete_concept_removes_row(self, session):
        store = FormStore(session)
        form = await store.create(Form(name="Users", code="USR", active=True))

        assert await store.delete(form.id) is True

        assert await store.get_by_id(form.id) is None
        assert await store.get_all(include_deleted=True) == []


class TestPermanentDelete:
    @pytest.mark.anyio
    async def test_permanent_delete_purges_soft_deleted_row(self, session):
        store = RolStore(session)
        rol = await store.create(Rol(name="Temp", active=True))
        await store.delete(rol.id)

        assert await store.permanent_delete(rol.id) is True

        assert await store.get_by_id(rol.id, include_deleted=True) is None

    @pytest.mark.anyio
    async def test_permanent_delete_missing_returns_false(self, session):
        assert await RolStore(session).permanent_delete(42) is False

    @pytest.mark.anyio
    async def test_permanent_delete_cascades_to_assignments(self, session):
        user = await UserStore(session).create(User(name="Ana", email="ana@example.com", password="x"))
        rol = await RolStore(session).create(Rol(name="Admin", active=True))
        link_store = RolUserStore(session)
        link = await link_store.create(RolUser(user_id=user.id, rol_id=rol.id))

        assert await RolStore(session).permanent_delete(rol.id) is True

        assert await link_store.get_by_id(link.id, include_deleted=True) is None


class TestUpdate:
    @pytest.mark.anyio
    async def test_update_replaces_mutable_columns(self, session, session_factory):
        store = RolStore(session)
        rol = await store.create(Rol(name="Admin", description="old", active=True))
        created_at = rol.created_at

        changed = Rol(id=rol.id, name="Administrators", description=None, active=False)
        assert await store.update(changed) is True

        async with session_factory() as fresh:
            stored = await RolStore(fresh).get_by_id(rol.id)
        assert stored.name == "Administrators"
        assert stored.description is None
        assert stored.active is False
        assert stored.created_at == created_at

    @pytest.mark.anyio
    async def test_update_missing_row_returns_false(self, session):
        store = RolStore(session)

        assert await store.update(Rol(id=5, name="Ghost", active=True)) is False
        assert await store.get_all() == []

    @pytest.mark.anyio
    async def test_update_soft_deleted_row_returns_false(self, session):
        store = RolStore(session)
        rol = await store.create(Rol(name="Temp", active=True))
        await store.delete(rol.id)

        assert await store.update(Rol(id=rol.id, name="Back", active=True)) is False


class TestConstraintViolations:
    @pytest.mark.anyio
    async def test_duplicate_unique_column_is_classified_unique(self, session):
        store = FormStore(session)
        await store.create(Form(name="Users", code="USR", active=True))

        with pytest.raises(IntegrityViolation) as exc_info:
            await store.create(Form(name="Users again", code="USR", active=True))

        assert exc_info.value.kind == "unique"
        assert exc_info.value.operation == "create"
        # the session stays usable after the rollback
        assert len(await store.get_all()) == 1

    @pytest.mark.anyio
    async def test_missing_reference_is_classified_foreign_key(self, session):
        store = RolUserStore(session)

        with pytest.raises(IntegrityViolation) as exc_info:
            await store.create(RolUser(user_id=123, rol_id=456))

        assert exc_info.value.kind == "foreign_key"

    @pytest.mark.anyio
    async def test_email_reusable_after_soft_delete(self, session):
        store = UserStore(session)
        first = await store.create(User(name="Ana", email="ana@example.com", password="x"))
        await store.delete(first.id)

        second = await store.create(User(name="Ana", email="ana@example.com", password="y"))

        assert second.id != first.id
        assert (await store.get_by_email("ana@example.com")).id == second.id


class TestNarrowLookups:
    @pytest.mark.anyio
    async def test_worker_lookups(self, session):
        worker = await WorkerStore(session).create(
            Worker(
                first_name="Ana",
                last_name="Lopez",
                identity_document="0102030405",
                job_title="Analyst",
                email="ana@example.com",
            )
        )
        user = await UserStore(session).create(
            User(name="Ana", email="ana@example.com", password="x", worker_id=worker.id)
        )
        logins = WorkerLoginStore(session)
        await logins.create(WorkerLogin(worker_id=worker.id, username="alopez", password="x"))
        await logins.create(WorkerLogin(worker_id=worker.id, username="ana.l", password="y"))

        assert (await WorkerStore(session).get_by_identity_document("0102030405")).id == worker.id
        assert (await UserStore(session).get_by_worker_id(worker.id)).id == user.id
        assert (await logins.get_by_username("alopez")).status == "active"
        assert [login.username for login in await logins.list_by_worker(worker.id)] == ["alopez", "ana.l"]

    @pytest.mark.anyio
    async def test_form_module_lookups_skip_soft_deleted_bindings(self, session):
        form = await FormStore(session).create(Form(name="Users", code="USR", active=True))
        first = await ModuleStore(session).create(Module(code="SEC", active=True))
        second = await ModuleStore(session).create(Module(code="AUD", active=True))
        store = FormModuleStore(session)
        kept = await store.create(FormModule(module_id=first.id, form_id=form.id))
        dropped = await store.create(FormModule(module_id=second.id, form_id=form.id))
        await store.delete(dropped.id)

        assert (await store.get_by_module_and_form(first.id, form.id)).id == kept.id
        assert await store.get_by_module_and_form(second.id, form.id) is None
        assert [binding.id for binding in await store.list_by_form(form.id)] == [kept.id]
        assert [binding.id for binding in await store.list_by_module(first.id)] == [kept.id]

    @pytest.mark.anyio
    async def test_assignment_lookups(self, session):
        user = await UserStore(session).create(User(name="Ana", email="ana@example.com", password="x"))
        rol = await RolStore(session).create(Rol(name="Admin", active=True))
        form = await FormStore(session).create(Form(name="Users", code="USR", active=True))
        permission = await PermissionStore(session).create(Permission(can_read=True))
        links = RolUserStore(session)
        link = await links.create(RolUser(user_id=user.id, rol_id=rol.id))
        grants = RolFormPermissionStore(session)
        first = await grants.create(RolFormPermission(rol_id=rol.id, form_id=form.id, permission_id=permission.id))
        second = await grants.create(RolFormPermission(rol_id=rol.id, form_id=form.id, permission_id=permission.id))

        assert [row.id for row in await links.list_by_user(user.id)] == [link.id]
        assert [row.id for row in await links.list_by_rol(rol.id)] == [link.id]
        assert [row.id for row in await grants.list_by_rol(rol.id)] == [first.id, second.id]
        assert len(await grants.list_by_rol_and_form(rol.id, form.id)) == 2
