"""Domain entities for the create/edit form lifecycle."""

from dataclasses import dataclass, field
from typing import Any

from .record import Record


@dataclass
class FormDraft:
    """An unsaved partial record bound to the form.

    Empty in create mode, seeded from a shallow copy of the selected record
    in edit mode. Never written to the collection until submit.
    """

    values: Record = field(default_factory=dict)
    editing_id: str | None = None

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

    def update(self, **fields: Any) -> None:
        self.values.update(fields)


@dataclass(frozen=True)
class FormField:
    """One input in the form modal, derived from the entity's draft schema."""

    name: str
    label: str
    kind: str = "text"  # text | number | date | datetime | select | boolean | relation
    required: bool = False
    options: tuple[Any, ...] = ()
    relation: str | None = None


@dataclass
class FormModalView:
    title: str
    fields: list[FormField]
    values: Record
    submit_text: str = "Save"
    cancel_text: str = "Cancel"
