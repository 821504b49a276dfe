"""Task API routes.

Learn: These routes are the HTTP interface to the task service.
The service layer handles ownership scoping; routes just translate
HTTP to service calls and domain errors to status codes.

Key patterns:
- The identity comes from Depends(get_current_user), never from the body
- PUT and PATCH both mean partial update (the SPA sends PUT)
- NotFoundError → 404 whether the task is missing or someone else's
"""

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.ext.asyncio import AsyncSession

from taskify.auth.dependencies import CurrentIdentity, get_current_user
from taskify.db.engine import get_db
from taskify.errors import NotFoundError
from taskify.metrics import TASKS_CREATED, metrics
from taskify.schemas.task import TaskCreate, TaskRead, TaskUpdate
from taskify.services.task_service import TaskService

router = APIRouter(prefix="/tasks")


def _task_svc(db: AsyncSession = Depends(get_db)) -> TaskService:
    return TaskService(db)


@router.get("", response_model=list[TaskRead])
async def list_tasks(
    identity: CurrentIdentity = Depends(get_current_user),
    svc: TaskService = Depends(_task_svc),
):
    """List the caller's tasks."""
    return await svc.list_tasks(identity.user)


@router.get("/{task_id}", response_model=TaskRead)
async def get_task(
    task_id: int,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: TaskService = Depends(_task_svc),
):
    """Get one of the caller's tasks by ID."""
    try:
        return await svc.get_task(task_id, identity.user)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("", response_model=TaskRead, status_code=201)
async def create_task(
    body: TaskCreate,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: TaskService = Depends(_task_svc),
):
    """Create a task owned by the caller (status defaults to TODO)."""
    task = await svc.create_task(
        owner=identity.user,
        title=body.title,
        description=body.description,
        status=body.status,
    )
    metrics.increment(TASKS_CREATED)
    return task


@router.api_route("/{task_id}", methods=["PUT", "PATCH"], response_model=TaskRead)
async def update_task(
    task_id: int,
    body: TaskUpdate,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: TaskService = Depends(_task_svc),
):
    """Partially update one of the caller's tasks."""
    try:
        return await svc.update_task(
            task_id=task_id,
            owner=identity.user,
            title=body.title,
            description=body.description,
            status=body.status,
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{task_id}", status_code=204)
async def delete_task(
    task_id: int,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: TaskService = Depends(_task_svc),
):
    """Delete one of the caller's tasks."""
    try:
        await svc.delete_task(task_id, identity.user)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)
