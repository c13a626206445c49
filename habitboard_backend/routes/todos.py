from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from habitboard_backend.auth import require_user_email
from habitboard_backend import repositories
from habitboard_backend.schemas import TodoCreate, TodoPatch

router = APIRouter()


@router.get("/v1/todos")
async def list_todos(user_email: str = Depends(require_user_email)):
    return {"items": await repositories.list_todos(user_email)}


@router.post("/v1/todos")
async def create_todo(payload: TodoCreate, user_email: str = Depends(require_user_email)):
    try:
        return await repositories.create_todo(user_email, payload.title, payload.position)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.patch("/v1/todos/{todo_id}")
async def update_todo(todo_id: str, payload: TodoPatch, user_email: str = Depends(require_user_email)):
    patch = payload.model_dump(exclude_unset=True)
    if not patch:
        raise HTTPException(status_code=400, detail="No changes provided")
    try:
        return await repositories.update_todo(user_email, todo_id, patch)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except LookupError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@router.delete("/v1/todos/{todo_id}")
async def delete_todo(todo_id: str, user_email: str = Depends(require_user_email)):
    await repositories.delete_todo(user_email, todo_id)
    return {"ok": True}
