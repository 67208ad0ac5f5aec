"""
EasyBuild Content API - Content Service (Business Logic)
==========================================================

What:  CRUD for every registered content type: read the active document,
       list, fetch by id, create, update, delete and seed.
How:   Each method receives the database handle and a ContentType from the
       registry. Payloads are validated with the type's pydantic schema,
       stamped with `_id` / `createdAt` / `updatedAt`, and written to the
       type's collection. Single-active types hand every active write to
       `enforce_single_active()`.
Who:   Called by the content route handlers.

Write Flow (single-active types):
    ┌──────────┐    ┌─────────────┐    ┌──────────────┐    ┌────────────────┐
    │ Validate │───▶│  Stamp id   │───▶│ Insert/Update│───▶│  Deactivate    │
    │ payload  │    │ + timestamps│    │  document    │    │  siblings      │
    └──────────┘    └─────────────┘    └──────────────┘    └────────────────┘
    The last step runs only when the written document is active.

Error Translation:
    pydantic.ValidationError  → ValidationError (400)
    malformed ObjectId        → ValidationError (400)
    DuplicateKeyError         → ValidationError (400)
    other PyMongoError        → StorageError (500)

ContentService keeps no state of its own; the database is passed per call.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List

from bson import ObjectId
from pydantic import ValidationError as PydanticValidationError
from pymongo import DESCENDING, ReturnDocument
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError, PyMongoError

from easybuild.database import redact_credentials
from easybuild.exceptions import (
    NotFoundError,
    OperationNotSupportedError,
    StorageError,
    ValidationError,
)
from easybuild.models.content import ContentType, DeleteMode, SeedMode
from easybuild.seed_data import SEED_DATA
from easybuild.services.activation import enforce_single_active

logger = logging.getLogger(__name__)

# Keys owned by the service layer; client payloads cannot overwrite them
PROTECTED_KEYS = frozenset({"_id", "createdAt", "updatedAt"})

Document = Dict[str, Any]


@dataclass
class SeedResult:
    documents: List[Document] = field(default_factory=list)
    skipped: bool = False


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def translate_validation_error(exc: PydanticValidationError) -> ValidationError:
    """
    Converts a pydantic error into the API's ValidationError.

    The message names the first offending field, e.g.
    "title: missing text for locale(s): de". Every error is listed in
    `errors` for logging.
    """
    errors = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "body"
        errors.append({
            "field": location,
            "message": error["msg"].removeprefix("Value error, "),
        })
    first = errors[0] if errors else {"field": "body", "message": "invalid payload"}
    return ValidationError(
        message=f"{first['field']}: {first['message']}",
        field=first["field"],
        errors=errors,
    )


def parse_object_id(document_id: str, content_type: ContentType) -> ObjectId:
    """Raises ValidationError unless `document_id` is a 24-character hex ObjectId."""
    if not ObjectId.is_valid(document_id):
        raise ValidationError(
            message=f"Invalid {content_type.label} ID format",
            field="id",
            context={"value": document_id},
        )
    return ObjectId(document_id)


class ContentService:
    """
    Business logic layer for content documents.

    Responsibilities:
        - get_active():      the current document of a single-active type
        - list_documents():  active (or all) documents in the type's order
        - get_document():    one document by id
        - create_document(): validated insert, then sibling deactivation
        - update_document(): merge, re-validate, update, then deactivation
        - delete_document(): hard or soft delete depending on the type
        - seed():            default content for a fresh database
    """

    # ── Helpers ───────────────────────────────────────────────────────────

    @staticmethod
    def collection(db: AsyncDatabase, content_type: ContentType) -> AsyncCollection:
        return db[content_type.collection]

    @staticmethod
    def validate_payload(content_type: ContentType, payload: Any) -> Document:
        """Validates `payload` against the type's schema and returns the stored shape."""
        try:
            model = content_type.payload.model_validate(payload)
        except PydanticValidationError as exc:
            raise translate_validation_error(exc) from None
        return model.model_dump(by_alias=True)

    @contextmanager
    def _storage_errors(self, action: str, content_type: ContentType) -> Iterator[None]:
        try:
            yield
        except DuplicateKeyError as exc:
            logger.warning("Duplicate %s rejected: %s", content_type.label, exc.details)
            raise ValidationError(
                message=f"{content_type.display_name} already exists",
                context={"key": (exc.details or {}).get("keyValue")},
            ) from exc
        except PyMongoError as exc:
            logger.error(
                "Database error while trying to %s %s: %s",
                action,
                content_type.label,
                redact_credentials(str(exc)),
            )
            raise StorageError(
                message=f"Failed to {action} {content_type.label}. Please try again.",
                context={"collection": content_type.collection, "error_type": type(exc).__name__},
            ) from exc

    async def _next_order(self, collection: AsyncCollection) -> int:
        last = await collection.find_one({}, sort=[("order", DESCENDING)])
        if last is None or last.get("order") is None:
            return 0
        return int(last["order"]) + 1

    async def _after_write(
        self,
        collection: AsyncCollection,
        content_type: ContentType,
        document: Document,
        now: datetime,
    ) -> None:
        if content_type.single_active and document.get("isActive"):
            await enforce_single_active(collection, document["_id"], now)

    # ── Reads ─────────────────────────────────────────────────────────────

    async def get_active(self, db: AsyncDatabase, content_type: ContentType) -> Document:
        """
        Returns the newest active document of a single-active type.

        Raises:
            NotFoundError: no document of the type is active (→ 404)
            StorageError: the query failed (→ 500)
        """
        collection = self.collection(db, content_type)
        with self._storage_errors("fetch", content_type):
            document = await collection.find_one(
                {"isActive": True}, sort=[("createdAt", DESCENDING)]
            )
        if document is None:
            raise NotFoundError(
                resource=content_type.label,
                message=f"No active {content_type.label} found",
            )
        return document

    async def list_documents(
        self,
        db: AsyncDatabase,
        content_type: ContentType,
        include_inactive: bool = False,
    ) -> List[Document]:
        """Active documents (all of them with `include_inactive`) in the type's sort order."""
        query: Document = {} if include_inactive else {"isActive": True}
        collection = self.collection(db, content_type)
        with self._storage_errors("fetch", content_type):
            cursor = collection.find(query).sort(list(content_type.sort))
            return await cursor.to_list(length=None)

    async def get_document(
        self, db: AsyncDatabase, content_type: ContentType, document_id: str
    ) -> Document:
        """
        Returns one document by id.

        Raises:
            ValidationError: `document_id` is not a well-formed ObjectId (→ 400)
            NotFoundError: no document has that id (→ 404)
        """
        object_id = parse_object_id(document_id, content_type)
        collection = self.collection(db, content_type)
        with self._storage_errors("fetch", content_type):
            document = await collection.find_one({"_id": object_id})
        if document is None:
            raise NotFoundError(
                resource=content_type.label,
                resource_id=document_id,
                message=f"{content_type.display_name} not found",
            )
        return document

    # ── Writes ────────────────────────────────────────────────────────────

    async def create_document(
        self, db: AsyncDatabase, content_type: ContentType, payload: Any
    ) -> Document:
        """
        Validates and inserts a new document.

        Wood entries without an order are placed after the current last one.
        For single-active types an active document deactivates its siblings
        after the insert.

        Raises:
            ValidationError: payload incomplete or malformed (→ 400)
            StorageError: insert failed (→ 500)
            SiblingDeactivationError: inserted, siblings still active (→ 500)
        """
        document = self.validate_payload(content_type, payload)
        collection = self.collection(db, content_type)
        now = _utcnow()

        with self._storage_errors("create", content_type):
            if content_type.auto_order and document.get("order") is None:
                document["order"] = await self._next_order(collection)
            document.update({"_id": ObjectId(), "createdAt": now, "updatedAt": now})
            await collection.insert_one(document)

        logger.info(
            "Created %s %s (active=%s)", content_type.label, document["_id"], document["isActive"]
        )
        await self._after_write(collection, content_type, document, now)
        return document

    async def update_document(
        self,
        db: AsyncDatabase,
        content_type: ContentType,
        document_id: str,
        payload: Any,
    ) -> Document:
        """
        Replaces the provided top-level fields of a document.

        The merged document is validated as a whole, so a localized field
        must be sent with all of its locales. Keys use the stored camelCase
        names (`isActive`, `mainImage`, ...).
        """
        object_id = parse_object_id(document_id, content_type)
        if not isinstance(payload, dict):
            raise ValidationError(message="Request body must be a JSON object", field="body")

        collection = self.collection(db, content_type)
        with self._storage_errors("update", content_type):
            existing = await collection.find_one({"_id": object_id})
        if existing is None:
            raise NotFoundError(
                resource=content_type.label,
                resource_id=document_id,
                message=f"{content_type.display_name} not found",
            )

        merged = {key: value for key, value in existing.items() if key not in PROTECTED_KEYS}
        merged.update({key: value for key, value in payload.items() if key not in PROTECTED_KEYS})
        changes = self.validate_payload(content_type, merged)
        now = _utcnow()

        with self._storage_errors("update", content_type):
            if content_type.auto_order and changes.get("order") is None:
                changes["order"] = await self._next_order(collection)
            changes["updatedAt"] = now
            updated = await collection.find_one_and_update(
                {"_id": object_id},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            )
        if updated is None:
            raise NotFoundError(
                resource=content_type.label,
                resource_id=document_id,
                message=f"{content_type.display_name} not found",
            )

        logger.info(
            "Updated %s %s (active=%s)", content_type.label, object_id, updated.get("isActive")
        )
        await self._after_write(collection, content_type, updated, now)
        return updated

    async def delete_document(
        self, db: AsyncDatabase, content_type: ContentType, document_id: str
    ) -> Document:
        """
        Deletes a document and returns it as it was (hard) or is now (soft).

        Raises:
            OperationNotSupportedError: the type cannot be deleted (→ 405)
            ValidationError / NotFoundError: bad or unknown id (→ 400 / 404)
        """
        if content_type.delete_mode is DeleteMode.NONE:
            raise OperationNotSupportedError(
                message=f"{content_type.display_name} entries cannot be deleted",
                context={"content_type": content_type.slug},
            )

        object_id = parse_object_id(document_id, content_type)
        collection = self.collection(db, content_type)
        with self._storage_errors("delete", content_type):
            if content_type.delete_mode is DeleteMode.SOFT:
                document = await collection.find_one_and_update(
                    {"_id": object_id},
                    {"$set": {"isActive": False, "updatedAt": _utcnow()}},
                    return_document=ReturnDocument.AFTER,
                )
            else:
                document = await collection.find_one_and_delete({"_id": object_id})

        if document is None:
            raise NotFoundError(
                resource=content_type.label,
                resource_id=document_id,
                message=f"{content_type.display_name} not found",
            )
        logger.info(
            "Deleted %s %s (%s)", content_type.label, object_id, content_type.delete_mode.value
        )
        return document

    async def seed(self, db: AsyncDatabase, content_type: ContentType) -> SeedResult:
        """
        Inserts the default content of a type.

        SKIP_IF_PRESENT types are left alone when any document exists;
        REPLACE types (projects, woods) drop their documents first.
        """
        now = _utcnow()
        documents = []
        for payload in SEED_DATA.get(content_type.slug, []):
            document = self.validate_payload(content_type, payload)
            if content_type.auto_order and document.get("order") is None:
                document["order"] = len(documents)
            document.update({"_id": ObjectId(), "createdAt": now, "updatedAt": now})
            documents.append(document)

        collection = self.collection(db, content_type)
        with self._storage_errors("seed", content_type):
            if content_type.seed_mode is SeedMode.REPLACE:
                removed = await collection.delete_many({})
                logger.info(
                    "Removed %d %s document(s) before seeding",
                    removed.deleted_count,
                    content_type.label,
                )
            elif await collection.count_documents({}) > 0:
                logger.info("Skipping %s seed: documents already exist", content_type.label)
                return SeedResult(skipped=True)

            if documents:
                await collection.insert_many(documents)

        active = [document for document in documents if document["isActive"]]
        if active:
            await self._after_write(collection, content_type, active[-1], now)
        logger.info("Seeded %d %s document(s)", len(documents), content_type.label)
        return SeedResult(documents=documents)


content_service = ContentService()
