"""Generic list-entity controller — the CRUD loop behind every entity page.

Owns one collection snapshot, the open form draft and the relation lookups
of a single entity. Mutations always close the form and re-fetch the
collection, whatever the write returned; failures are reported as notices
and typed :class:`MutationOutcome` values, never as exceptions.

Usage:
    async with ListEntityController(entity, gateway, context, notifier) as ctrl:
        await ctrl.load()
        page = ctrl.table_view().render(ctrl.items, ViewState(search="abc"))
"""

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from pydantic import ValidationError

from moldops.application.catalog import EntityDefinition, RelationLookup
from moldops.application.interfaces import DataGateway, Notifier
from moldops.application.services.cancellation import CancellationToken, OperationCancelled
from moldops.application.services.session_service import AppContext
from moldops.application.services.table_view import TableView
from moldops.domain.entities import (
    CollectionSnapshot,
    FormDraft,
    MutationOutcome,
    MutationStatus,
    Notice,
    NoticeLevel,
    Record,
    record_id,
)
from moldops.domain.exceptions import DraftValidationError, GatewayError

logger = logging.getLogger(__name__)

Confirm = Callable[[], bool | Awaitable[bool]]


def _decline() -> bool:
    return False


class ListEntityController:
    """CRUD state machine for one entity page.

    ``Idle(loading) → Loaded → {Editing ⇄ Loaded}``. Leaving the ``async
    with`` block unmounts the controller: in-flight gateway results are
    dropped instead of applied.
    """

    def __init__(
        self,
        entity: EntityDefinition,
        gateway: DataGateway,
        context: AppContext,
        notifier: Notifier | None = None,
        *,
        page_size: int = 10,
    ):
        self.entity = entity
        self._gateway = gateway
        self._context = context
        self._notifier = notifier
        self._page_size = page_size
        self._token = CancellationToken()
        self._pending = 0
        self._in_flight = False
        self._attempted = False

        self.snapshot = CollectionSnapshot(entity.table)
        self.lookups: dict[str, list[Record]] = {lookup.table: [] for lookup in entity.relations}
        self.draft: FormDraft | None = None
        self.notices: list[Notice] = []

    async def __aenter__(self) -> "ListEntityController":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        self.unmount()

    def unmount(self) -> None:
        self._token.cancel()
        self.draft = None

    # ── State ────────────────────────────────────────────────────────

    @property
    def items(self) -> list[Record]:
        return self.snapshot.rows

    @property
    def loading(self) -> bool:
        return self._pending > 0 or not self._attempted

    @property
    def unmounted(self) -> bool:
        return self._token.cancelled

    @property
    def form_open(self) -> bool:
        return self.draft is not None

    @property
    def editing(self) -> str | None:
        return self.draft.editing_id if self.draft else None

    def can_edit(self) -> bool:
        """Whether the session may mutate this entity.

        Closed while roles are loading or when the user holds no role at all.
        """
        roles = self._context.roles
        if self._context.roles_loading or not roles:
            return False
        permitted = self.entity.permitted_roles
        if permitted is None:
            return True
        return bool(roles & permitted)

    def _notify(self, level: NoticeLevel, message: str, operation: str) -> None:
        user = self._context.user
        notice = Notice(
            level=level,
            message=message,
            entity=self.entity.slug,
            operation=operation,
            user_id=user.id if user is not None else None,
        )
        self.notices.append(notice)
        if self._notifier is not None:
            self._notifier.notify(notice)

    # ── Loading ──────────────────────────────────────────────────────

    async def load(self) -> bool:
        """Mount: fetch the collection and every relation lookup concurrently."""
        results = await asyncio.gather(
            self.fetch_all(),
            *(self._fetch_lookup(lookup) for lookup in self.entity.relations),
        )
        return results[0]

    async def fetch_all(self) -> bool:
        """Replace the snapshot with the gateway's rows; keep it untouched on failure."""
        self._pending += 1
        try:
            rows = await self._token.guard(self._gateway.select(self.entity.table, self.entity.columns))
        except OperationCancelled:
            logger.debug("Dropped %s rows that arrived after unmount", self.entity.table)
            return False
        except GatewayError as exc:
            logger.error("Error fetching %s: %s", self.entity.table, exc)
            self._notify(NoticeLevel.ERROR, f"Could not load {self.entity.title}: {exc.message}", "fetch")
            return False
        finally:
            self._pending -= 1
            self._attempted = True

        self.snapshot.replace(rows)
        logger.debug("Loaded %d %s rows", len(rows), self.entity.table)
        return True

    async def _fetch_lookup(self, lookup: RelationLookup) -> bool:
        self._pending += 1
        try:
            rows = await self._token.guard(self._gateway.select(lookup.table, lookup.columns))
        except OperationCancelled:
            return False
        except GatewayError as exc:
            logger.warning("Error fetching lookup %s: %s", lookup.table, exc)
            self._notify(NoticeLevel.WARNING, f"Could not load {lookup.table} options", "fetch")
            return False
        finally:
            self._pending -= 1

        self.lookups[lookup.table] = rows
        return True

    # ── Form ─────────────────────────────────────────────────────────

    def open_form(self, record: Record | None = None) -> FormDraft:
        """Edit mode seeds the draft with a shallow copy; create mode starts empty."""
        if record is None:
            self.draft = FormDraft()
        else:
            self.draft = FormDraft(values=dict(record), editing_id=record_id(record))
        return self.draft

    def update_draft(self, **fields: Any) -> FormDraft:
        if self.draft is None:
            raise RuntimeError("No form is open")
        self.draft.update(**fields)
        return self.draft

    def close_form(self) -> None:
        self.draft = None

    def validate_draft(self) -> Record:
        """Run the draft through the entity schema and return the row to write.

        Raises:
            DraftValidationError: with one entry per failing field.
        """
        values = self.draft.values if self.draft else {}
        try:
            model = self.entity.draft_model.model_validate(values)
        except ValidationError as exc:
            errors = [
                {
                    "field": ".".join(str(part) for part in err["loc"]),
                    "message": err["msg"],
                    "type": err["type"],
                }
                for err in exc.errors()
            ]
            raise DraftValidationError(self.entity.singular, errors) from exc
        return model.to_row(partial=self.draft is not None and self.draft.is_editing)

    # ── Mutations ────────────────────────────────────────────────────

    def _refuse(self, operation: str) -> MutationOutcome | None:
        if self._token.cancelled:
            return MutationOutcome(MutationStatus.CANCELLED, operation)
        if self._in_flight:
            return MutationOutcome(MutationStatus.BUSY, operation, message="Another save is in progress")
        if not self.can_edit():
            self._notify(NoticeLevel.WARNING, f"You are not allowed to change {self.entity.title}", operation)
            return MutationOutcome(MutationStatus.FORBIDDEN, operation, message="Permission denied")
        return None

    async def submit(self) -> MutationOutcome:
        """Validate and save the open draft, then close the form and re-fetch."""
        operation = "update" if self.draft is not None and self.draft.is_editing else "insert"
        refused = self._refuse(operation)
        if refused is not None:
            return refused
        if self.draft is None:
            return MutationOutcome(MutationStatus.INVALID, operation, message="No form is open")

        try:
            row = self.validate_draft()
        except DraftValidationError as exc:
            self._notify(NoticeLevel.WARNING, str(exc), operation)
            return MutationOutcome(MutationStatus.INVALID, operation, message=str(exc), errors=exc.errors)

        editing_id = self.draft.editing_id
        self._in_flight = True
        try:
            saved: Record | None = None
            write_error: GatewayError | None = None
            try:
                if editing_id is not None:
                    saved = await self._token.guard(self._gateway.update(self.entity.table, editing_id, row))
                else:
                    saved = await self._token.guard(self._gateway.insert(self.entity.table, row))
            except OperationCancelled:
                return MutationOutcome(MutationStatus.CANCELLED, operation)
            except GatewayError as exc:
                logger.error("Error saving %s: %s", self.entity.table, exc)
                write_error = exc

            self.close_form()
            refreshed = await self.fetch_all()
        finally:
            self._in_flight = False

        return self._outcome(operation, saved, write_error, refreshed)

    async def remove(self, rid: str, confirm: Confirm = _decline) -> MutationOutcome:
        """Delete ``rid`` once ``confirm`` agrees, then re-fetch.

        A declined confirmation makes no gateway call at all.
        """
        refused = self._refuse("delete")
        if refused is not None:
            return refused

        decision = confirm()
        if inspect.isawaitable(decision):
            decision = await decision
        if not decision:
            return MutationOutcome(MutationStatus.DECLINED, "delete")

        self._in_flight = True
        try:
            write_error: GatewayError | None = None
            try:
                await self._token.guard(self._gateway.delete(self.entity.table, rid))
            except OperationCancelled:
                return MutationOutcome(MutationStatus.CANCELLED, "delete")
            except GatewayError as exc:
                logger.error("Error deleting %s %s: %s", self.entity.table, rid, exc)
                write_error = exc

            refreshed = await self.fetch_all()
        finally:
            self._in_flight = False

        return self._outcome("delete", {"id": rid}, write_error, refreshed)

    def _outcome(
        self,
        operation: str,
        record: Record | None,
        write_error: GatewayError | None,
        refreshed: bool,
    ) -> MutationOutcome:
        if self._token.cancelled:
            return MutationOutcome(MutationStatus.CANCELLED, operation, record=record)
        verb = {"insert": "created", "update": "updated", "delete": "deleted"}[operation]
        if write_error is not None:
            message = f"Could not {operation} {self.entity.singular}: {write_error.message}"
            self._notify(NoticeLevel.ERROR, message, operation)
            return MutationOutcome(
                MutationStatus.WRITE_FAILED,
                operation,
                message=write_error.message,
                gateway_status=write_error.status_code,
            )
        if not refreshed:
            return MutationOutcome(
                MutationStatus.REFETCH_FAILED,
                operation,
                record=record,
                message=f"{self.entity.singular} {verb} but the list could not be reloaded",
            )
        self._notify(NoticeLevel.SUCCESS, f"{self.entity.singular} {verb}", operation)
        return MutationOutcome(MutationStatus.SUCCEEDED, operation, record=record)

    # ── View ─────────────────────────────────────────────────────────

    def table_view(self, confirm: Confirm = _decline) -> TableView:
        """The table for this page; delete requests ask ``confirm`` first."""
        return TableView(
            self.entity.column_specs,
            searchable=self.entity.searchable,
            filter_key=self.entity.filter_key,
            paginated=self.entity.paginated,
            page_size=self._page_size,
            can_edit=self.can_edit(),
            on_add=self.open_form,
            on_edit=self.open_form,
            on_delete=lambda rid: self.remove(rid, confirm),
        )
