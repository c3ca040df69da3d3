"""Entity definitions — everything one list/edit page needs to know about its table."""

from dataclasses import dataclass, field

from moldops.application.schemas.drafts import EntityDraft
from moldops.domain.entities import ColumnSpec


@dataclass(frozen=True)
class RelationLookup:
    """A side collection loaded next to the main one to populate select inputs.

    ``label_field`` is the column shown to the user for each option.
    """

    table: str
    columns: str
    label_field: str = "name"


@dataclass(frozen=True)
class EntityDefinition:
    slug: str
    title: str
    singular: str
    table: str
    columns: str
    draft_model: type[EntityDraft]
    column_specs: tuple[ColumnSpec, ...]
    permitted_roles: frozenset[str] | None = None
    filter_key: str | None = None
    relations: tuple[RelationLookup, ...] = ()
    searchable: bool = True
    paginated: bool = True
    add_label: str | None = None
    legacy_paths: tuple[str, ...] = field(default_factory=tuple)

    @property
    def path(self) -> str:
        return f"/{self.slug}"

    @property
    def add_button_text(self) -> str:
        return f"Add {self.add_label or self.singular}"

    def relation(self, table: str) -> RelationLookup | None:
        for lookup in self.relations:
            if lookup.table == table:
                return lookup
        return None
