"""
EasyBuild Content API - Content Route Handlers
================================================

What:  The generic content endpoints shared by every registered type:
           GET    /content/{content_type}
           POST   /content/{content_type}
           POST   /content/{content_type}/seed
           GET    /content/{content_type}/{document_id}
           PUT    /content/{content_type}/{document_id}
           DELETE /content/{content_type}/{document_id}
How:   Resolve the type from the registry, check the id, acquire the
       database, delegate to ContentService and wrap the result in the
       response envelope.
Who:   The public site (reads) and the admin dashboard (writes).

Dependency Order:
    resolve_content_type → checked_document_id → get_database
    An unknown type answers 404 and a malformed id answers 400 before any
    connection attempt is made.
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import JSONResponse
from pymongo.asynchronous.database import AsyncDatabase

from easybuild.database import get_database
from easybuild.models.content import ContentType, get_content_type
from easybuild.schemas.common import Envelope, serialize_document
from easybuild.services.content_service import content_service, parse_object_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/content", tags=["Content"])

_ERROR_RESPONSES = {
    400: {"description": "Invalid payload or document ID", "model": Envelope},
    404: {"description": "Unknown content type or document", "model": Envelope},
    500: {"description": "Configuration or storage failure", "model": Envelope},
}


# ── Dependencies ──────────────────────────────────────────────────────────


async def resolve_content_type(content_type: str) -> ContentType:
    """Path slug → registry entry. Unknown slugs raise NotFoundError (404)."""
    return get_content_type(content_type)


async def checked_document_id(
    document_id: str,
    content_type: ContentType = Depends(resolve_content_type),
) -> str:
    parse_object_id(document_id, content_type)
    return document_id


def respond(
    data: Any = None,
    message: Optional[str] = None,
    status_code: int = 200,
) -> JSONResponse:
    """Wraps `data` (a document or a list of documents) in the success envelope."""
    if isinstance(data, list):
        data = [serialize_document(document) for document in data]
    elif isinstance(data, dict):
        data = serialize_document(data)
    return JSONResponse(
        status_code=status_code,
        content=Envelope(success=True, message=message, data=data).to_content(),
    )


# ── Collection Endpoints ──────────────────────────────────────────────────


@router.get(
    "/{content_type}",
    responses={200: {"description": "Active document or list", "model": Envelope}, **_ERROR_RESPONSES},
    summary="Read the current content of a type",
    description=(
        "Single-active types return their active document. Listings and catalogs "
        "return every active document in display order; admin=true includes "
        "inactive ones."
    ),
)
async def read_content(
    content_type: ContentType = Depends(resolve_content_type),
    admin: bool = Query(default=False, description="Include inactive documents"),
    db: AsyncDatabase = Depends(get_database),
) -> JSONResponse:
    if content_type.single_active and not admin:
        document = await content_service.get_active(db, content_type)
        return respond(document)

    documents = await content_service.list_documents(db, content_type, include_inactive=admin)
    return respond(documents)


@router.post(
    "/{content_type}",
    status_code=201,
    responses={201: {"description": "Document created", "model": Envelope}, **_ERROR_RESPONSES},
    summary="Create a document",
    description=(
        "Validates the payload (every localized field needs en, de and al) and "
        "stores it. An active single-active document deactivates the others."
    ),
)
async def create_content(
    content_type: ContentType = Depends(resolve_content_type),
    payload: Any = Body(...),
    db: AsyncDatabase = Depends(get_database),
) -> JSONResponse:
    document = await content_service.create_document(db, content_type, payload)
    return respond(
        document,
        message=f"{content_type.display_name} created successfully",
        status_code=201,
    )


@router.post(
    "/{content_type}/seed",
    responses={
        200: {"description": "Existing content kept, nothing seeded", "model": Envelope},
        201: {"description": "Default content inserted", "model": Envelope},
        **_ERROR_RESPONSES,
    },
    summary="Insert the default content of a type",
)
async def seed_content(
    content_type: ContentType = Depends(resolve_content_type),
    db: AsyncDatabase = Depends(get_database),
) -> JSONResponse:
    """
    Loads the site's default content.

    Returns 200 without changes when the type already has documents, except
    for types seeded in replace mode (projects, woods).
    """
    result = await content_service.seed(db, content_type)
    if result.skipped:
        return respond(
            [],
            message=f"{content_type.display_name} content already exists, seed skipped",
        )
    return respond(
        result.documents,
        message=f"{content_type.display_name} content seeded successfully",
        status_code=201,
    )


# ── Document Endpoints ────────────────────────────────────────────────────


@router.get(
    "/{content_type}/{document_id}",
    responses={200: {"description": "The document", "model": Envelope}, **_ERROR_RESPONSES},
    summary="Read one document by ID",
)
async def read_document(
    content_type: ContentType = Depends(resolve_content_type),
    document_id: str = Depends(checked_document_id),
    db: AsyncDatabase = Depends(get_database),
) -> JSONResponse:
    document = await content_service.get_document(db, content_type, document_id)
    return respond(document)


@router.put(
    "/{content_type}/{document_id}",
    responses={200: {"description": "Document updated", "model": Envelope}, **_ERROR_RESPONSES},
    summary="Update a document",
    description=(
        "Replaces the given top-level fields (camelCase keys) and validates the "
        "result. Activating a single-active document deactivates the others."
    ),
)
async def update_content(
    content_type: ContentType = Depends(resolve_content_type),
    document_id: str = Depends(checked_document_id),
    payload: Any = Body(...),
    db: AsyncDatabase = Depends(get_database),
) -> JSONResponse:
    document = await content_service.update_document(db, content_type, document_id, payload)
    return respond(document, message=f"{content_type.display_name} updated successfully")


@router.delete(
    "/{content_type}/{document_id}",
    responses={
        200: {"description": "Document deleted", "model": Envelope},
        405: {"description": "The type cannot be deleted", "model": Envelope},
        **_ERROR_RESPONSES,
    },
    summary="Delete a document",
    description="Projects, social media links and woods are removed; services are deactivated.",
)
async def delete_content(
    content_type: ContentType = Depends(resolve_content_type),
    document_id: str = Depends(checked_document_id),
    db: AsyncDatabase = Depends(get_database),
) -> JSONResponse:
    document = await content_service.delete_document(db, content_type, document_id)
    return respond(document, message=f"{content_type.display_name} deleted successfully")
