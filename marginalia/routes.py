"""
Name: Marginalia API Controllers

Responsibilities:
  - Expose HTTP endpoints for anchoring, texts and anchored comments
  - Delegate business logic to application use cases and FingerprintService
  - Validate requests and serialize responses using Pydantic models
  - Map use-case errors (CommentError) to RFC 7807 responses

Collaborators:
  - application.use_cases: text/comment use cases
  - anchoring.FingerprintService: anchor creation and fingerprint scans
  - container: Dependency providers
  - error_responses: error factories

Constraints:
  - Synchronous endpoints: anchoring is CPU-bound and FastAPI runs sync
    handlers in its worker threadpool, so scans never block the event loop
  - Caller identity comes from the X-User-Id header (401 when missing)

Notes:
  - This module stays thin (controllers only)
  - Engine exceptions (OutOfRange, SelectionNotFound, MatchAborted) are
    rendered by exception_handlers.py
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, Header, Query, status
from pydantic import BaseModel, Field

from .anchoring import FingerprintService, character_offset
from .application.use_cases import (
    CommentError,
    CommentErrorCode,
    CreateCommentInput,
    CreateCommentUseCase,
    CreateTextInput,
    CreateTextUseCase,
    DeleteCommentUseCase,
    GetTextUseCase,
    ListCommentsUseCase,
    ListUserTextsUseCase,
    RelocateCommentsInput,
    RelocateCommentsUseCase,
)
from .config import get_settings
from .container import (
    get_create_comment_use_case,
    get_create_text_use_case,
    get_delete_comment_use_case,
    get_fingerprint_service,
    get_get_text_use_case,
    get_list_comments_use_case,
    get_list_user_texts_use_case,
    get_relocate_comments_use_case,
)
from .context import user_id_var
from .domain.entities import Comment, Text, TextAnchor
from .error_responses import (
    OPENAPI_ERROR_RESPONSES,
    forbidden,
    not_found,
    payload_too_large,
    unauthorized,
    validation_error,
)

router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)

# R: Limits are loaded from Settings at module load time for Pydantic schema
_settings = get_settings()


# =============================================================================
# Anchors
# =============================================================================


class AnchorReq(BaseModel):
    full_text: str = Field(..., description="Logical text the selection belongs to")
    start_offset: int = Field(..., ge=0)
    end_offset: int = Field(..., ge=0)
    context_length: int | None = Field(
        default=None,
        ge=0,
        le=_settings.max_context_chars,
        description="Context chars on each side (defaults to server setting)",
    )


class SelectionAnchorReq(BaseModel):
    selected_text: str = Field(
        ..., min_length=1, max_length=_settings.max_selection_chars
    )
    full_text: str


class AnchorRes(BaseModel):
    selected_text: str
    context_before: str
    context_after: str
    start_offset: int
    end_offset: int
    fingerprint: str
    character_offset: int  # R: Midpoint of the selection (display hint)


class FindReq(BaseModel):
    fingerprint: str = Field(..., pattern=r"^[0-9a-f]{64}$")
    document_text: str
    snippet_length: int | None = Field(default=None, gt=0)


class FindRes(BaseModel):
    found: bool
    position: int | None = None


# =============================================================================
# Texts
# =============================================================================


class CreateTextReq(BaseModel):
    title: str = Field(..., min_length=1, max_length=_settings.max_title_chars)
    author: str | None = Field(default=None, max_length=255)
    isbn: str | None = Field(default=None, max_length=13)
    type: str | None = Field(default=None, max_length=50)
    edition: str | None = Field(default=None, max_length=100)
    url: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class TextRes(BaseModel):
    id: UUID
    title: str
    author: str | None = None
    isbn: str | None = None
    type: str | None = None
    edition: str | None = None
    url: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime | None = None


class TextsListRes(BaseModel):
    texts: list[TextRes]


# =============================================================================
# Comments
# =============================================================================


class CreateCommentReq(BaseModel):
    text_id: UUID
    selected_text: str = Field(
        ..., min_length=1, max_length=_settings.max_selection_chars
    )
    context_before: str = Field(default="", max_length=_settings.max_context_chars)
    context_after: str = Field(default="", max_length=_settings.max_context_chars)
    comment_text: str = Field(
        ..., min_length=1, max_length=_settings.max_comment_chars
    )
    start_offset: int = Field(..., ge=0)
    end_offset: int = Field(..., ge=0)
    chapter: str | None = Field(default=None, max_length=255)
    page_number: int | None = Field(default=None, ge=0)
    paragraph_number: int | None = Field(default=None, ge=0)
    is_public: bool = True


class CommentRes(BaseModel):
    id: UUID
    text_id: UUID
    user_id: str
    selected_text: str
    context_before: str
    context_after: str
    fingerprint: str
    comment_text: str
    character_offset: int
    chapter: str | None = None
    page_number: int | None = None
    paragraph_number: int | None = None
    is_public: bool
    created_at: datetime | None = None


class CommentsListRes(BaseModel):
    comments: list[CommentRes]


class DeleteCommentRes(BaseModel):
    deleted: bool


class RelocateReq(BaseModel):
    text_id: UUID
    document_text: str


class RelocationRes(BaseModel):
    comment_id: UUID
    found: bool
    position: int | None = None
    confidence: float | None = None
    match_type: str | None = None
    aborted: bool = False


class RelocateRes(BaseModel):
    relocations: list[RelocationRes]


# =============================================================================
# Helpers
# =============================================================================


async def require_user(x_user_id: str | None = Header(default=None)) -> str:
    """R: Resolve the caller identity from the X-User-Id header."""
    user_id = (x_user_id or "").strip()
    if not user_id:
        raise unauthorized("X-User-Id header is required")
    user_id_var.set(user_id)
    return user_id


def _check_document_size(document_text: str) -> None:
    if len(document_text) > _settings.max_document_chars:
        raise payload_too_large(f"{_settings.max_document_chars} characters")


def _raise_comment_error(error: CommentError, *, identifier: UUID | None = None) -> None:
    if error.code == CommentErrorCode.VALIDATION_ERROR:
        raise validation_error(error.message)
    if error.code == CommentErrorCode.NOT_FOUND:
        raise not_found(error.resource or "Resource", str(identifier or "-"))
    if error.code == CommentErrorCode.FORBIDDEN:
        raise forbidden(error.message)
    raise validation_error(error.message)


def _to_anchor_res(anchor: TextAnchor) -> AnchorRes:
    return AnchorRes(
        selected_text=anchor.selected_text,
        context_before=anchor.context_before,
        context_after=anchor.context_after,
        start_offset=anchor.start_offset,
        end_offset=anchor.end_offset,
        fingerprint=anchor.fingerprint,
        character_offset=character_offset(anchor.start_offset, anchor.end_offset),
    )


def _to_text_res(text: Text) -> TextRes:
    return TextRes(
        id=text.id,
        title=text.title,
        author=text.author,
        isbn=text.isbn,
        type=text.type,
        edition=text.edition,
        url=text.url,
        metadata=text.metadata,
        created_at=text.created_at,
    )


def _to_comment_res(comment: Comment) -> CommentRes:
    return CommentRes(
        id=comment.id,
        text_id=comment.text_id,
        user_id=comment.user_id,
        selected_text=comment.selected_text,
        context_before=comment.context_before,
        context_after=comment.context_after,
        fingerprint=comment.fingerprint,
        comment_text=comment.comment_text,
        character_offset=comment.character_offset,
        chapter=comment.chapter,
        page_number=comment.page_number,
        paragraph_number=comment.paragraph_number,
        is_public=comment.is_public,
        created_at=comment.created_at,
    )


# =============================================================================
# Anchor endpoints
# =============================================================================


@router.post("/anchors", response_model=AnchorRes, tags=["anchors"])
def create_anchor(
    req: AnchorReq,
    service: FingerprintService = Depends(get_fingerprint_service),
    _user_id: str = Depends(require_user),
):
    _check_document_size(req.full_text)
    anchor = service.create_anchor(
        req.full_text, req.start_offset, req.end_offset, req.context_length
    )
    return _to_anchor_res(anchor)


@router.post("/anchors/selection", response_model=AnchorRes, tags=["anchors"])
def anchor_selection(
    req: SelectionAnchorReq,
    service: FingerprintService = Depends(get_fingerprint_service),
    _user_id: str = Depends(require_user),
):
    _check_document_size(req.full_text)
    anchor = service.anchor_selection(req.selected_text, req.full_text)
    return _to_anchor_res(anchor)


@router.post("/anchors/relocate", response_model=FindRes, tags=["anchors"])
def find_anchor(
    req: FindReq,
    service: FingerprintService = Depends(get_fingerprint_service),
    _user_id: str = Depends(require_user),
):
    _check_document_size(req.document_text)
    position = service.find_by_fingerprint(
        req.fingerprint, req.document_text, req.snippet_length
    )
    return FindRes(found=position is not None, position=position)


# =============================================================================
# Text endpoints
# =============================================================================


@router.post(
    "/texts",
    response_model=TextRes,
    status_code=status.HTTP_201_CREATED,
    tags=["texts"],
)
def create_text(
    req: CreateTextReq,
    use_case: CreateTextUseCase = Depends(get_create_text_use_case),
    user_id: str = Depends(require_user),
):
    result = use_case.execute(
        CreateTextInput(
            title=req.title,
            author=req.author,
            isbn=req.isbn,
            type=req.type,
            edition=req.edition,
            url=req.url,
            metadata=req.metadata,
            user_id=user_id,
        )
    )
    if result.error:
        _raise_comment_error(result.error)
    return _to_text_res(result.text)


@router.get("/texts", response_model=TextsListRes, tags=["texts"])
def list_user_texts(
    use_case: ListUserTextsUseCase = Depends(get_list_user_texts_use_case),
    user_id: str = Depends(require_user),
):
    """R: The caller's library, most recently accessed first."""
    result = use_case.execute(user_id)
    return TextsListRes(texts=[_to_text_res(text) for text in result.texts])


@router.get("/texts/{text_id}", response_model=TextRes, tags=["texts"])
def get_text(
    text_id: UUID,
    use_case: GetTextUseCase = Depends(get_get_text_use_case),
):
    result = use_case.execute(text_id)
    if result.error:
        _raise_comment_error(result.error, identifier=text_id)
    return _to_text_res(result.text)


# =============================================================================
# Comment endpoints
# =============================================================================


@router.post(
    "/comments",
    response_model=CommentRes,
    status_code=status.HTTP_201_CREATED,
    tags=["comments"],
)
def create_comment(
    req: CreateCommentReq,
    use_case: CreateCommentUseCase = Depends(get_create_comment_use_case),
    user_id: str = Depends(require_user),
):
    result = use_case.execute(
        CreateCommentInput(
            text_id=req.text_id,
            user_id=user_id,
            selected_text=req.selected_text,
            context_before=req.context_before,
            context_after=req.context_after,
            comment_text=req.comment_text,
            start_offset=req.start_offset,
            end_offset=req.end_offset,
            chapter=req.chapter,
            page_number=req.page_number,
            paragraph_number=req.paragraph_number,
            is_public=req.is_public,
        )
    )
    if result.error:
        _raise_comment_error(result.error, identifier=req.text_id)
    return _to_comment_res(result.comment)


@router.get("/comments", response_model=CommentsListRes, tags=["comments"])
def list_comments(
    text_id: UUID = Query(...),
    use_case: ListCommentsUseCase = Depends(get_list_comments_use_case),
    _user_id: str = Depends(require_user),
):
    result = use_case.execute(text_id)
    if result.error:
        _raise_comment_error(result.error, identifier=text_id)
    return CommentsListRes(comments=[_to_comment_res(c) for c in result.comments])


@router.delete("/comments/{comment_id}", response_model=DeleteCommentRes, tags=["comments"])
def delete_comment(
    comment_id: UUID,
    use_case: DeleteCommentUseCase = Depends(get_delete_comment_use_case),
    user_id: str = Depends(require_user),
):
    result = use_case.execute(comment_id=comment_id, user_id=user_id)
    if result.error:
        _raise_comment_error(result.error, identifier=comment_id)
    return DeleteCommentRes(deleted=result.deleted)


@router.post("/comments/relocate", response_model=RelocateRes, tags=["comments"])
def relocate_comments(
    req: RelocateReq,
    use_case: RelocateCommentsUseCase = Depends(get_relocate_comments_use_case),
    _user_id: str = Depends(require_user),
):
    _check_document_size(req.document_text)
    result = use_case.execute(
        RelocateCommentsInput(text_id=req.text_id, document_text=req.document_text)
    )
    if result.error:
        _raise_comment_error(result.error, identifier=req.text_id)

    relocations = []
    for relocation in result.relocations:
        match = relocation.match
        relocations.append(
            RelocationRes(
                comment_id=relocation.comment_id,
                found=relocation.found,
                position=match.position if match else None,
                confidence=match.confidence if match else None,
                match_type=match.match_type.value if match else None,
                aborted=relocation.aborted,
            )
        )
    return RelocateRes(relocations=relocations)
