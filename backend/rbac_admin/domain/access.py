"""
Pure access-resolution rules.

A (rol, form) pair may carry several permission rows; their flags are
OR-combined. A form is visible when its combined ``can_read`` is set and
the form itself is active. Visible forms hang under every active module
they are bound to; forms with no such module are reported as ungrouped.
"""
from collections.abc import Iterable, Mapping
from typing import Any, Protocol

from ..schemas.access import Capabilities, FormAccess, ModuleAccess


class FormLike(Protocol):
    id: int
    name: str
    code: str
    active: bool


class ModuleLike(Protocol):
    id: int
    code: str
    name: str | None


def capabilities_of(permission: Any) -> Capabilities:
    return Capabilities(
        can_read=bool(permission.can_read),
        can_create=bool(permission.can_create),
        can_update=bool(permission.can_update),
        can_delete=bool(permission.can_delete),
    )


def combine_capabilities(grants: Iterable[Capabilities]) -> Capabilities:
    combined = Capabilities()
    for grant in grants:
        combined = combined.merge(grant)
    return combined


def combine_by_form(grants: Iterable[tuple[int, Capabilities]]) -> dict[int, Capabilities]:
    """OR-combine ``(form_id, capabilities)`` pairs into one entry per form."""
    combined: dict[int, Capabilities] = {}
    for form_id, capabilities in grants:
        current = combined.get(form_id)
        combined[form_id] = capabilities if current is None else current.merge(capabilities)
    return combined


def visible_forms(
    forms: Iterable[FormLike], capabilities: Mapping[int, Capabilities]
) -> list[FormAccess]:
    visible = []
    for form in sorted(forms, key=lambda f: f.id):
        granted = capabilities.get(form.id)
        if granted is None or not granted.can_read or not form.active:
            continue
        visible.append(
            FormAccess(form_id=form.id, name=form.name, code=form.code, **granted.model_dump())
        )
    return visible


def build_tree(
    forms: list[FormAccess],
    bindings: Iterable[tuple[ModuleLike, int]],
) -> tuple[list[ModuleAccess], list[FormAccess]]:
    """Group visible forms under their modules.

    ``bindings`` are ``(module, form_id)`` pairs for active modules. Modules
    without any visible form are left out. Returns ``(modules, ungrouped)``.
    """
    by_form_id = {form.form_id: form for form in forms}
    modules: dict[int, ModuleAccess] = {}
    grouped: set[int] = set()
    for module, form_id in bindings:
        form = by_form_id.get(form_id)
        if form is None:
            continue
        entry = modules.get(module.id)
        if entry is None:
            entry = modules[module.id] = ModuleAccess(
                module_id=module.id, code=module.code, name=module.name
            )
        if all(existing.form_id != form_id for existing in entry.forms):
            entry.forms.append(form)
        grouped.add(form_id)

    ordered = sorted(modules.values(), key=lambda m: m.module_id)
    for entry in ordered:
        entry.forms.sort(key=lambda f: f.form_id)
    ungrouped = [form for form in forms if form.form_id not in grouped]
    return ordered, ungrouped
