# 📦 utils/fetch_providers.py

import asyncio
import structlog
from fastapi.concurrency import run_in_threadpool
from typing import List

from schemas.provider import Provider
from utils.supabase_utils import StoreError

log = structlog.get_logger()


async def fetch_providers(store, accepting_only: bool = True, retries: int = 3, delay: float = 2.0) -> List[Provider]:
    """Fetch directory providers through the store, with retry logic."""
    for attempt in range(retries):
        try:
            log.info(f"Fetching providers (attempt {attempt+1})")
            providers = await run_in_threadpool(store.list_providers, accepting_only=accepting_only)

            if not providers:
                log.warning("No providers found in Supabase.")
                return []

            log.info(f"Successfully fetched {len(providers)} providers from Supabase.")
            return providers

        except Exception as e:
            log.error(f"Failed to fetch providers (attempt {attempt+1}): {e}")
            if attempt < retries - 1:
                await asyncio.sleep(delay * (2 ** attempt))  # Exponential backoff
            else:
                raise StoreError("Could not fetch providers from Supabase.") from e
