from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from habitboard_backend.auth import require_user_email
from habitboard_backend import repositories
from habitboard_backend.schemas import ShortcutCreate, ShortcutPatch

router = APIRouter()


@router.get("/v1/shortcuts")
async def list_shortcuts(user_email: str = Depends(require_user_email)):
    return {"items": await repositories.list_shortcuts(user_email)}


@router.post("/v1/shortcuts")
async def create_shortcut(payload: ShortcutCreate, user_email: str = Depends(require_user_email)):
    try:
        return await repositories.create_shortcut(
            user_email, payload.title, payload.url, payload.category, payload.position
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.patch("/v1/shortcuts/{shortcut_id}")
async def update_shortcut(shortcut_id: str, payload: ShortcutPatch, user_email: str = Depends(require_user_email)):
    patch = payload.model_dump(exclude_unset=True)
    if not patch:
        raise HTTPException(status_code=400, detail="No changes provided")
    try:
        return await repositories.update_shortcut(user_email, shortcut_id, patch)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except LookupError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@router.delete("/v1/shortcuts/{shortcut_id}")
async def delete_shortcut(shortcut_id: str, user_email: str = Depends(require_user_email)):
    await repositories.delete_shortcut(user_email, shortcut_id)
    return {"ok": True}
