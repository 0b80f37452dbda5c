"""Task REST endpoints.

Static paths (stats, export, bulk operations) are registered before the
``/{task_id}`` routes so they are never captured as ids.
"""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse, Response
from pydantic import AfterValidator

from taskboard.core.config import Constants
from taskboard.core.errors import ErrorCode
from taskboard.core.events import EventBus
from taskboard.core.task_store import TaskStore
from taskboard.domain.create_models import TaskCreate, validate_due_date
from taskboard.domain.query import ExportFormat, SortField, SortOrder, TaskQuery
from taskboard.domain.task import TaskPriority, TaskStatus
from taskboard.domain.update_models import BulkDeleteRequest, BulkStatusUpdate, TaskUpdate
from taskboard.interface.dependencies import get_event_bus, get_task_store
from taskboard.services import task_service


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tasks", tags=["tasks"])

Store = Annotated[TaskStore, Depends(get_task_store)]
Events = Annotated[EventBus, Depends(get_event_bus)]
DueDateBound = Annotated[str | None, AfterValidator(validate_due_date)]


def _task_not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=ErrorCode.ERR_TASK_NOT_FOUND)


@router.get("/stats")
async def get_task_stats(store: Store) -> dict:
    """Counts by status and priority plus the number of overdue tasks."""
    stats = task_service.get_stats(store=store)
    return {"success": True, "data": stats.to_wire()}


@router.get("/export")
async def export_tasks(
    store: Store,
    export_format: Annotated[ExportFormat, Query(alias="format")] = ExportFormat.JSON,
) -> Response:
    """Download all tasks as JSON or CSV."""
    if export_format == ExportFormat.CSV:
        csv_text = task_service.export_tasks_csv(store=store)
        return Response(
            content=csv_text,
            media_type="text/csv",
            headers={"Content-Disposition": "attachment; filename=tasks.csv"},
        )

    export = task_service.export_tasks_json(store=store)
    return JSONResponse(
        content=export.to_wire(),
        headers={"Content-Disposition": "attachment; filename=tasks.json"},
    )


@router.post("/bulk-delete")
async def bulk_delete_tasks(store: Store, events: Events, payload: BulkDeleteRequest) -> dict:
    """Delete up to 100 tasks at once."""
    result = task_service.bulk_delete_tasks(store=store, events=events, ids=[str(task_id) for task_id in payload.ids])
    return {
        "success": True,
        "data": result.to_wire(),
        "message": f"Successfully deleted {result.deleted_count} task(s)",
    }


@router.patch("/bulk-status")
async def bulk_update_status(store: Store, events: Events, payload: BulkStatusUpdate) -> dict:
    """Set the status of up to 100 tasks at once."""
    result = task_service.bulk_update_status(
        store=store,
        events=events,
        ids=[str(task_id) for task_id in payload.ids],
        status=payload.status,
    )
    return {
        "success": True,
        "data": result.to_wire(),
        "message": f"Successfully updated {result.updated_count} task(s)",
    }


@router.get("")
async def list_tasks(  # noqa: PLR0913
    store: Store,
    status_filter: Annotated[TaskStatus | None, Query(alias="status")] = None,
    priority: TaskPriority | None = None,
    search: Annotated[str | None, Query(max_length=Constants.SEARCH_MAX_LENGTH)] = None,
    tags: Annotated[str | None, Query(max_length=Constants.TAGS_FILTER_MAX_LENGTH)] = None,
    due_date_from: Annotated[DueDateBound, Query(alias="dueDateFrom")] = None,
    due_date_to: Annotated[DueDateBound, Query(alias="dueDateTo")] = None,
    sort_by: Annotated[SortField, Query(alias="sortBy")] = SortField.CREATED_AT,
    sort_order: Annotated[SortOrder, Query(alias="sortOrder")] = SortOrder.DESC,
    page: Annotated[int, Query(ge=1)] = Constants.DEFAULT_PAGE,
    limit: Annotated[int, Query(ge=1, le=Constants.MAX_PAGE_LIMIT)] = Constants.DEFAULT_PAGE_LIMIT,
) -> dict:
    """List tasks with filtering, sorting and pagination."""
    query = TaskQuery(
        status=status_filter,
        priority=priority,
        search=search.strip() if search else None,
        tags=tags.strip() if tags else None,
        due_date_from=due_date_from,
        due_date_to=due_date_to,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )
    result = task_service.list_tasks(store=store, query=query)
    return {
        "success": True,
        "data": [task.to_wire() for task in result.tasks],
        "pagination": result.pagination.to_wire(),
    }


@router.get("/{task_id}")
async def get_task(store: Store, task_id: UUID) -> dict:
    """Get a single task."""
    task = task_service.get_task(store=store, task_id=str(task_id))
    if task is None:
        raise _task_not_found()
    return {"success": True, "data": task.to_wire()}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_task(store: Store, events: Events, payload: Annotated[TaskCreate, Body()]) -> dict:
    """Create a task; omitted fields take their defaults."""
    task = task_service.create_task(store=store, events=events, data=payload.model_dump())
    return {"success": True, "data": task.to_wire(), "message": "Task created successfully"}


@router.put("/{task_id}")
async def update_task(store: Store, events: Events, task_id: UUID, payload: Annotated[TaskUpdate, Body()]) -> dict:
    """Update only the fields present in the request body."""
    task = task_service.update_task(store=store, events=events, task_id=str(task_id), patch=payload.to_patch())
    if task is None:
        raise _task_not_found()
    return {"success": True, "data": task.to_wire(), "message": "Task updated successfully"}


@router.delete("/{task_id}")
async def delete_task(store: Store, events: Events, task_id: UUID) -> dict:
    """Delete a task."""
    if not task_service.delete_task(store=store, events=events, task_id=str(task_id)):
        raise _task_not_found()
    return {"success": True, "message": "Task deleted successfully"}
