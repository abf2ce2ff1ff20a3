import time

import structlog

log = structlog.get_logger()


class StoreError(Exception):
    """A Supabase call failed (after retries where they apply)."""


class InvalidRecordError(StoreError):
    """A stored row could not be validated into a domain record."""


def _find_existing(table, row_id):
    """Response holding the row stored under ``row_id``, or None (also when the lookup fails)."""
    try:
        response = table.select("*").eq("id", row_id).execute()
    except Exception as e:
        log.warning("Lookup before insert retry failed", id=row_id, error=str(e))
        return None
    return response if response.data else None


def insert_with_retry(table, data, retries=3, delay=1):
    """Insert ``data``, retrying with exponential backoff.

    When ``data`` carries an ``id``, each retry first looks that id up and
    returns the stored row if an earlier attempt already wrote it, so a lost
    response never produces a second row.
    """
    row_id = data.get("id") if isinstance(data, dict) else None
    last_error = None
    for attempt in range(retries):
        if attempt and row_id is not None:
            existing = _find_existing(table, row_id)
            if existing is not None:
                log.info("Insert already applied by an earlier attempt", id=row_id, attempt=attempt + 1)
                return existing
        try:
            response = table.insert(data).execute()
            if response.data:
                return response
            last_error = StoreError("Supabase insert returned no rows")
        except Exception as e:
            last_error = e
        log.warning("Supabase insert failed", attempt=attempt + 1, error=str(last_error))
        if attempt < retries - 1:
            time.sleep(delay * (2 ** attempt))  # Exponential backoff
    if row_id is not None:
        existing = _find_existing(table, row_id)
        if existing is not None:
            return existing
    raise StoreError("Supabase insert failed after retries") from last_error
