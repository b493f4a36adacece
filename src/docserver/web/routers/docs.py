from typing import Annotated, Any
from uuid import UUID

from fastapi import APIRouter, Form, Query, UploadFile
from fastapi.responses import FileResponse
from pydantic import BaseModel, Field

from docserver.core.modules.document.models import DocumentView, UploadedFile
from docserver.errors import NotFoundError
from docserver.web.deps import AppDep, CurrentUserDep
from docserver.web.openapi import ErrorResponse

router = APIRouter(tags=["docs"])


class UploadResult(BaseModel):
    json_data: Any = Field(None, alias="json", description="JSON content of the document")
    file: str = Field(..., description="Document name")

    model_config = {"populate_by_name": True}


class UploadResponse(BaseModel):
    data: UploadResult


class DocumentListResult(BaseModel):
    docs: list[DocumentView]


class DocumentListResponse(BaseModel):
    data: DocumentListResult


@router.post(
    "/docs",
    summary="Upload document",
    description=(
        "Upload a file or a JSON document. The `meta` form field is a JSON object with "
        "`name`, `public`, `mime`, `grant` (list of logins) and `json` keys."
    ),
    operation_id="uploadDocument",
    responses={
        200: {"description": "Document uploaded"},
        400: {"model": ErrorResponse, "description": "Invalid metadata"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def upload_document(
    meta: Annotated[str, Form()], app: AppDep, current_user: CurrentUserDep, file: UploadFile | None = None
) -> UploadResponse:
    upload = None
    if file is not None:
        upload = UploadedFile(filename=file.filename or "", content=await file.read())
    document = await app.upload_document(current_user, meta, upload)
    return UploadResponse(data=UploadResult(json_data=document.json_data, file=document.name))


@router.get(
    "/docs",
    summary="List documents",
    description="List own documents, or the documents of `login` that are public or shared with the caller.",
    operation_id="listDocuments",
    responses={
        200: {"description": "List of documents"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "User not found"},
    },
)
async def list_documents(
    app: AppDep,
    current_user: CurrentUserDep,
    login: str | None = None,
    limit: Annotated[int | None, Query(ge=1)] = None,
) -> DocumentListResponse:
    documents = await app.list_documents(current_user, login, limit)
    return DocumentListResponse(data=DocumentListResult(docs=[DocumentView.from_domain(d) for d in documents]))


@router.get(
    "/docs/{document_id}",
    summary="Get document",
    description="Download a file document, or get the content of a JSON document.",
    operation_id="getDocument",
    response_model=None,
    responses={
        200: {"description": "File content or JSON document"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        403: {"model": ErrorResponse, "description": "Permission denied"},
        404: {"model": ErrorResponse, "description": "Document not found"},
    },
)
async def get_document(document_id: UUID, app: AppDep, current_user: CurrentUserDep) -> FileResponse | dict[str, Any]:
    document = await app.get_document(current_user, document_id)
    if document.file:
        if document.file_path is None:
            raise NotFoundError(f"Document '{document_id}' has no stored file")
        return FileResponse(document.file_path, media_type=document.mime, filename=document.name)
    return {"data": document.json_data}


@router.delete(
    "/docs/{document_id}",
    summary="Delete document",
    description="Delete a document. Only the owner may delete it.",
    operation_id="deleteDocument",
    responses={
        200: {"description": "Document deleted"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        403: {"model": ErrorResponse, "description": "Not the owner"},
        404: {"model": ErrorResponse, "description": "Document not found"},
    },
)
async def delete_document(document_id: UUID, app: AppDep, current_user: CurrentUserDep) -> dict[str, dict[str, bool]]:
    await app.delete_document(current_user, document_id)
    return {"response": {str(document_id): True}}
