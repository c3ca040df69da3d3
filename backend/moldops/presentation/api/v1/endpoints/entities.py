"""Generic entity endpoints — one table page, form and CRUD surface per catalogue entry."""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Response, status

from moldops.application.catalog import EntityDefinition, list_entities
from moldops.application.interfaces import DataGateway
from moldops.application.schemas import (
    AffordancesSchema,
    ColumnSchema,
    EntitySummary,
    FormFieldSchema,
    FormModalResponse,
    MutationResponse,
    NoticeSchema,
    RowSchema,
    TablePageResponse,
)
from moldops.application.services import AppContext, FormModal, ListEntityController
from moldops.domain.entities import (
    ALL_FILTER,
    MutationOutcome,
    MutationStatus,
    Notice,
    Record,
    TablePage,
    ViewState,
)
from moldops.infrastructure.dependencies import get_data_gateway, get_entity_controller, require_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/entities", tags=["Entities"])


# ── Helpers ──────────────────────────────────────────────────────────

def _summary(entity: EntityDefinition, can_edit: bool) -> EntitySummary:
    return EntitySummary(
        slug=entity.slug,
        title=entity.title,
        singular=entity.singular,
        table=entity.table,
        path=entity.path,
        permitted_roles=sorted(entity.permitted_roles) if entity.permitted_roles is not None else None,
        can_edit=can_edit,
        add_button_text=entity.add_button_text,
    )


def _notices(notices: list[Notice]) -> list[NoticeSchema]:
    return [NoticeSchema(**n.to_dict()) for n in notices]


def _to_page_response(controller: ListEntityController, page: TablePage) -> TablePageResponse:
    entity = controller.entity
    return TablePageResponse(
        entity=_summary(entity, controller.can_edit()),
        columns=[ColumnSchema(key=c.key, label=c.label) for c in page.columns],
        rows=[RowSchema(id=r.id, cells=r.cells, record=r.record) for r in page.rows],
        total_rows=page.total_rows,
        filtered_count=page.filtered_count,
        page=page.page,
        page_count=page.page_count,
        page_size=page.page_size,
        has_prev=page.has_prev,
        has_next=page.has_next,
        affordances=AffordancesSchema(
            add=page.affordances.add,
            edit=page.affordances.edit,
            delete=page.affordances.delete,
            actions_column=page.affordances.actions_column,
        ),
        searchable=entity.searchable,
        filter_key=page.filter_key,
        filter_options=page.filter_options,
        search=page.search,
        filter_value=page.filter_value,
        notices=_notices(controller.notices),
    )


def _status_for(outcome: MutationOutcome) -> int:
    if outcome.ok:
        return status.HTTP_201_CREATED if outcome.operation == "insert" else status.HTTP_200_OK
    if outcome.status == MutationStatus.INVALID:
        return status.HTTP_422_UNPROCESSABLE_ENTITY
    if outcome.status == MutationStatus.FORBIDDEN:
        return status.HTTP_403_FORBIDDEN
    if outcome.status == MutationStatus.DECLINED:
        return status.HTTP_428_PRECONDITION_REQUIRED
    if outcome.status in (MutationStatus.BUSY, MutationStatus.CANCELLED):
        return status.HTTP_409_CONFLICT
    if outcome.gateway_status in (status.HTTP_404_NOT_FOUND, status.HTTP_409_CONFLICT):
        return outcome.gateway_status
    return status.HTTP_502_BAD_GATEWAY


def _to_mutation_response(
    controller: ListEntityController, outcome: MutationOutcome, response: Response
) -> MutationResponse:
    response.status_code = _status_for(outcome)
    return MutationResponse(
        status=outcome.status.value,
        operation=outcome.operation,
        record=outcome.record,
        message=outcome.message,
        errors=outcome.errors,
        notices=_notices(controller.notices),
    )


async def _load(controller: ListEntityController) -> None:
    """Mount the page; a collection that cannot be fetched is a bad gateway."""
    if not await controller.load():
        detail = controller.notices[-1].message if controller.notices else "Could not load records"
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=detail)


async def _load_record(controller: ListEntityController, record_id: str) -> Record:
    await _load(controller)
    record = controller.snapshot.find(record_id)
    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{controller.entity.singular} with id '{record_id}' not found",
        )
    return record


# ── Endpoints ────────────────────────────────────────────────────────

@router.get("", response_model=list[EntitySummary])
async def list_entity_types(
    context: AppContext = Depends(require_user),
    gateway: DataGateway = Depends(get_data_gateway),
) -> list[EntitySummary]:
    """The entity catalogue, with the caller's edit permission on each."""
    return [
        _summary(entity, ListEntityController(entity, gateway, context).can_edit())
        for entity in list_entities()
    ]


@router.get("/{slug}", response_model=TablePageResponse)
async def get_table_page(
    search: str = Query("", description="Case-insensitive substring over every field"),
    filter: str = Query(ALL_FILTER, description="Exact value of the entity's filter column"),
    page: int = Query(1, description="1-based page, clamped to the available range"),
    controller: ListEntityController = Depends(get_entity_controller),
) -> TablePageResponse:
    """Fetch the collection and render one searched, filtered page of it."""
    await _load(controller)
    state = ViewState(search=search, filter_value=filter or ALL_FILTER, page=page)
    table_page = controller.table_view().render(controller.items, state)
    return _to_page_response(controller, table_page)


@router.get("/{slug}/form", response_model=FormModalResponse)
async def get_form(
    record_id: str | None = Query(None, description="Record to edit; omit for a blank create form"),
    controller: ListEntityController = Depends(get_entity_controller),
) -> FormModalResponse:
    """Render the create or edit form, with relation options filled in."""
    if record_id is None:
        await controller.load()
        controller.open_form()
    else:
        controller.open_form(await _load_record(controller, record_id))

    view = FormModal(controller).render()
    return FormModalResponse(
        title=view.title,
        fields=[
            FormFieldSchema(
                name=f.name,
                label=f.label,
                kind=f.kind,
                required=f.required,
                options=list(f.options),
                relation=f.relation,
            )
            for f in view.fields
        ],
        values=view.values,
        submit_text=view.submit_text,
        cancel_text=view.cancel_text,
        editing_id=controller.editing,
        notices=_notices(controller.notices),
    )


@router.post("/{slug}", response_model=MutationResponse, status_code=status.HTTP_201_CREATED)
async def create_record(
    response: Response,
    data: dict[str, Any] = Body(...),
    controller: ListEntityController = Depends(get_entity_controller),
) -> MutationResponse:
    """Validate and insert a new record, then reload the collection."""
    modal = FormModal(controller)
    controller.open_form()
    modal.change(**data)
    outcome = await modal.save()
    return _to_mutation_response(controller, outcome, response)


@router.put("/{slug}/{record_id}", response_model=MutationResponse)
async def update_record(
    record_id: str,
    response: Response,
    data: dict[str, Any] = Body(...),
    controller: ListEntityController = Depends(get_entity_controller),
) -> MutationResponse:
    """Apply ``data`` over the stored record and save the changed fields."""
    modal = FormModal(controller)
    controller.open_form(await _load_record(controller, record_id))
    modal.change(**data)
    outcome = await modal.save()
    return _to_mutation_response(controller, outcome, response)


@router.delete("/{slug}/{record_id}", response_model=MutationResponse)
async def delete_record(
    record_id: str,
    response: Response,
    confirm: bool = Query(False, description="Must be true; otherwise nothing is deleted"),
    controller: ListEntityController = Depends(get_entity_controller),
) -> MutationResponse:
    """Delete a record once the caller confirms, then reload the collection."""
    outcome = await controller.remove(record_id, confirm=lambda: confirm)
    if outcome.status == MutationStatus.DECLINED:
        logger.debug("Delete of %s %s not confirmed", controller.entity.table, record_id)
    return _to_mutation_response(controller, outcome, response)
