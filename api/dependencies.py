# 📦 api/dependencies.py
# ─────────────────────────────
# FastAPI dependencies: Supabase-backed store and the authenticated user

from typing import Optional

import structlog
from fastapi import Header, HTTPException

from config import settings
from services.care_plan_store import CarePlanStore
from supabase_client import get_supabase

log = structlog.get_logger()


def get_store() -> CarePlanStore:
    return CarePlanStore(
        get_supabase(),
        insert_retries=settings.insert_retries,
        retry_delay=settings.retry_delay,
    )


def get_current_user(authorization: Optional[str] = Header(None)) -> str:
    """Resolve the bearer token to a Supabase Auth user id."""
    if not authorization or not authorization.lower().startswith("bearer "):
        raise HTTPException(status_code=401, detail="Missing bearer token.")
    token = authorization.split(" ", 1)[1].strip()

    try:
        response = get_supabase().auth.get_user(token)
    except Exception as e:
        log.warning("Token rejected by Supabase Auth", error=str(e))
        raise HTTPException(status_code=401, detail="Invalid or expired session.") from e

    user = getattr(response, "user", None)
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid or expired session.")
    return str(user.id)
