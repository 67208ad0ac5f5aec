"""
EasyBuild Content API - Single-Active Document Enforcement
============================================================

What:  Keeps at most one document active per single-active content type.
How:   After a write leaves a document active, every *other* active document
       in the same collection is switched to inactive. The written document
       is excluded by `_id`, never by content.
Who:   Called by ContentService on every create and update of a single-active
       type. Writes that leave the document inactive must not call it.

Consistency:
    The primary write and the sibling update are two operations, not a
    transaction. If the sibling update fails, the primary write stays and
    SiblingDeactivationError is raised; repeating the write reconciles.
    Two concurrent activations of the same type are last-writer-wins and can
    briefly leave two documents active.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from bson import ObjectId
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import PyMongoError

from easybuild.database import redact_credentials
from easybuild.exceptions import SiblingDeactivationError

logger = logging.getLogger(__name__)


async def enforce_single_active(
    collection: AsyncCollection,
    document_id: ObjectId,
    now: Optional[datetime] = None,
) -> int:
    """
    Deactivates every active document of `collection` except `document_id`.

    Idempotent: siblings that are already inactive are not touched.

    Returns:
        Number of documents that were deactivated.

    Raises:
        SiblingDeactivationError: the update failed; `document_id` is still
            active and so may be a sibling.
    """
    timestamp = now or datetime.now(timezone.utc)
    try:
        result = await collection.update_many(
            {"_id": {"$ne": document_id}, "isActive": True},
            {"$set": {"isActive": False, "updatedAt": timestamp}},
        )
    except PyMongoError as exc:
        logger.error(
            "Could not deactivate siblings of %s in '%s': %s",
            document_id,
            collection.name,
            redact_credentials(str(exc)),
        )
        raise SiblingDeactivationError(
            collection=collection.name,
            document_id=str(document_id),
            context={"error_type": type(exc).__name__},
        ) from exc

    if result.modified_count:
        logger.info(
            "Deactivated %d previous document(s) in '%s' in favour of %s",
            result.modified_count,
            collection.name,
            document_id,
        )
    return result.modified_count
