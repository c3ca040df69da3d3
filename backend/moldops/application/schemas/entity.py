"""Pydantic DTOs for entity pages — catalogue, table pages, forms and mutations."""

from typing import Any

from pydantic import BaseModel


class ColumnSchema(BaseModel):
    key: str
    label: str


class AffordancesSchema(BaseModel):
    add: bool
    edit: bool
    delete: bool
    actions_column: bool


class RowSchema(BaseModel):
    id: str
    cells: dict[str, str]
    record: dict[str, Any]


class NoticeSchema(BaseModel):
    level: str
    message: str
    entity: str | None = None
    operation: str | None = None
    created_at: str


class EntitySummary(BaseModel):
    """One catalogue entry."""

    slug: str
    title: str
    singular: str
    table: str
    path: str
    permitted_roles: list[str] | None
    can_edit: bool
    add_button_text: str


class TablePageResponse(BaseModel):
    """A rendered page of one entity's table."""

    entity: EntitySummary
    columns: list[ColumnSchema]
    rows: list[RowSchema]
    total_rows: int
    filtered_count: int
    page: int
    page_count: int
    page_size: int | None
    has_prev: bool
    has_next: bool
    affordances: AffordancesSchema
    searchable: bool
    filter_key: str | None = None
    filter_options: list[Any] = []
    search: str = ""
    filter_value: Any = "__all__"
    notices: list[NoticeSchema] = []


class FormFieldSchema(BaseModel):
    name: str
    label: str
    kind: str
    required: bool
    options: list[Any] = []
    relation: str | None = None


class FormModalResponse(BaseModel):
    title: str
    fields: list[FormFieldSchema]
    values: dict[str, Any]
    submit_text: str
    cancel_text: str
    editing_id: str | None = None
    notices: list[NoticeSchema] = []


class FieldErrorSchema(BaseModel):
    field: str
    message: str
    type: str


class MutationResponse(BaseModel):
    """Result of a create, update or delete."""

    status: str
    operation: str
    record: dict[str, Any] | None = None
    message: str | None = None
    errors: list[FieldErrorSchema] = []
    notices: list[NoticeSchema] = []
