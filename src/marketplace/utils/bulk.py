"""Per-item execution for bulk admin actions."""

import structlog

from marketplace.exceptions import describe_error

logger = structlog.get_logger(__name__)


def run_bulk(ids, action, id_field: str) -> dict:
    """Apply ``action`` to each id independently.

    A failing id does not stop the batch and nothing already applied is rolled
    back. Returns ``{"success": [ids...], "failed": [{id_field: id, "error": msg}]}``.
    """
    result = {"success": [], "failed": []}
    for item_id in ids:
        try:
            action(item_id)
        except Exception as exc:
            logger.warning("Bulk item failed", **{id_field: str(item_id)}, error=describe_error(exc))
            result["failed"].append({id_field: str(item_id), "error": describe_error(exc)})
        else:
            result["success"].append(str(item_id))
    return result
