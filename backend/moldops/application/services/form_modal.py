"""Form modal — the create/edit dialog bound to a controller's draft."""

import types
from collections.abc import Mapping, Sequence
from datetime import date, datetime
from typing import Any, Literal, Union, get_args, get_origin

from moldops.application.schemas.drafts import EntityDraft
from moldops.application.services.list_entity_controller import ListEntityController
from moldops.domain.entities import FormField, FormModalView, MutationOutcome, Record


def _unwrap_optional(annotation: Any) -> Any:
    if get_origin(annotation) in (Union, types.UnionType):
        args = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def _kind(annotation: Any) -> str:
    if get_origin(annotation) is Literal:
        return "select"
    if annotation is bool:
        return "boolean"
    if annotation is datetime:
        return "datetime"
    if annotation is date:
        return "date"
    if annotation in (int, float):
        return "number"
    return "text"


def form_fields(
    model: type[EntityDraft],
    lookups: Mapping[str, Sequence[Record]] | None = None,
    label_fields: Mapping[str, str] | None = None,
) -> list[FormField]:
    """Derive form inputs from a draft schema.

    Relation fields get one ``{"value": id, "label": ...}`` option per row of
    the matching lookup collection.
    """
    lookups = lookups or {}
    label_fields = label_fields or {}
    fields: list[FormField] = []

    for name, info in model.model_fields.items():
        annotation = _unwrap_optional(info.annotation)
        extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else {}
        relation = extra.get("relation")
        label = info.title or name.replace("_", " ").title()

        if relation:
            label_field = label_fields.get(relation, "name")
            options = tuple(
                {"value": row.get("id"), "label": str(row.get(label_field) or row.get("id"))}
                for row in lookups.get(relation, ())
            )
            fields.append(
                FormField(name, label, "relation", info.is_required(), options, relation=relation)
            )
            continue

        kind = _kind(annotation)
        options = get_args(annotation) if kind == "select" else ()
        fields.append(FormField(name, label, kind, info.is_required(), tuple(options)))

    return fields


class FormModal:
    """Renders nothing while no draft is open.

    ``save`` and ``cancel`` are the only two ways out of an open form; both
    delegate to the controller.
    """

    def __init__(self, controller: ListEntityController, submit_text: str = "Save", cancel_text: str = "Cancel"):
        self._controller = controller
        self.submit_text = submit_text
        self.cancel_text = cancel_text

    @property
    def is_open(self) -> bool:
        return self._controller.form_open

    def render(self) -> FormModalView | None:
        draft = self._controller.draft
        if draft is None:
            return None

        entity = self._controller.entity
        prefix = "Edit" if draft.is_editing else "Add"
        label_fields = {lookup.table: lookup.label_field for lookup in entity.relations}
        return FormModalView(
            title=f"{prefix} {entity.singular}",
            fields=form_fields(entity.draft_model, self._controller.lookups, label_fields),
            values=dict(draft.values),
            submit_text=self.submit_text,
            cancel_text=self.cancel_text,
        )

    def change(self, **fields: Any) -> None:
        self._controller.update_draft(**fields)

    async def save(self) -> MutationOutcome:
        return await self._controller.submit()

    def cancel(self) -> None:
        self._controller.close_form()
