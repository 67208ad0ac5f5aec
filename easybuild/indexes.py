"""
EasyBuild Content API - Collection Indexes
============================================

What:  Creates the indexes the content queries rely on.
When:  Once at startup, after the connection warm-up succeeds. MongoDB
       treats an existing identical index as a no-op, so this is safe to run
       on every boot.

Indexes:
    every collection    (isActive, createdAt desc)  active reads / listings
    socialmedias        platform (unique)           one link per platform
    socialmedias, woods (order)                     catalog ordering
"""

import logging
from typing import List

from pymongo import ASCENDING, DESCENDING, IndexModel
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from easybuild.database import redact_credentials
from easybuild.models.content import CONTENT_TYPES

logger = logging.getLogger(__name__)


def index_models(collection: str) -> List[IndexModel]:
    indexes = [IndexModel([("isActive", ASCENDING), ("createdAt", DESCENDING)])]
    if collection == "socialmedias":
        indexes.append(IndexModel([("platform", ASCENDING)], unique=True))
    if collection in ("socialmedias", "woods"):
        indexes.append(IndexModel([("order", ASCENDING)]))
    return indexes


async def ensure_indexes(db: AsyncDatabase) -> None:
    """Creates missing indexes; failures are logged and never stop startup."""
    for content_type in CONTENT_TYPES.values():
        try:
            await db[content_type.collection].create_indexes(index_models(content_type.collection))
        except PyMongoError as exc:
            logger.warning(
                "Could not create indexes for '%s': %s",
                content_type.collection,
                redact_credentials(str(exc)),
            )
