"""Pure access-resolution rules, no database involved."""
from types import SimpleNamespace

from rbac_admin.domain.access import (
    build_tree,
    combine_by_form,
    combine_capabilities,
    visible_forms,
)
from rbac_admin.schemas.access import Capabilities

READ = Capabilities(can_read=True)
CREATE = Capabilities(can_create=True)
DELETE = Capabilities(can_delete=True)


def _form(form_id: int, code: str, active: bool = True):
    return SimpleNamespace(id=form_id, name=code.title(), code=code, active=active)


def _module(module_id: int, code: str):
    return SimpleNamespace(id=module_id, code=code, name=None)


def test_combine_capabilities_is_logical_or():
    combined = combine_capabilities([READ, CREATE, DELETE])

    assert combined == Capabilities(can_read=True, can_create=True, can_delete=True)


def test_combine_capabilities_of_nothing_is_all_false():
    assert combine_capabilities([]) == Capabilities()


def test_combine_by_form_merges_duplicates_only_per_form():
    combined = combine_by_form([(1, READ), (2, CREATE), (1, DELETE)])

    assert combined == {
        1: Capabilities(can_read=True, can_delete=True),
        2: CREATE,
    }


def test_visible_forms_need_read_and_active_form():
    forms = [_form(3, "INA", active=False), _form(1, "USR"), _form(2, "ROL")]
    grants = {1: READ, 2: CREATE, 3: READ}

    visible = visible_forms(forms, grants)

    assert [form.code for form in visible] == ["USR"]


def test_build_tree_groups_under_every_module_and_keeps_ungrouped():
    forms = visible_forms([_form(1, "USR"), _form(2, "ROL"), _form(3, "RPT")], {1: READ, 2: READ, 3: READ})
    sec, aud = _module(10, "SEC"), _module(20, "AUD")

    modules, ungrouped = build_tree(forms, [(aud, 1), (sec, 2), (sec, 1), (sec, 1)])

    assert [module.code for module in modules] == ["SEC", "AUD"]
    assert [form.code for form in modules[0].forms] == ["USR", "ROL"]
    assert [form.code for form in modules[1].forms] == ["USR"]
    assert [form.code for form in ungrouped] == ["RPT"]


def test_build_tree_skips_modules_without_visible_forms():
    forms = visible_forms([_form(1, "USR")], {1: READ})

    modules, ungrouped = build_tree(forms, [(_module(10, "SEC"), 99)])

    assert modules == []
    assert [form.code for form in ungrouped] == ["USR"]
