# =============================================================================
# app/routers/qna.py - Doctor Q&A Board
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, Request, status

from app.auth import AuthUser, get_current_user
from app.responses import listed, ok, paginated
from core.models.community import AnswerCreate, QuestionCreate, VoteRequest
from core.services.qna_service import QnaService
from lib.utils import client_ip

router = APIRouter()


def _author_ip(request: Request) -> str | None:
    peer = request.client.host if request.client else None
    return client_ip(request.headers.get("x-forwarded-for"), peer)


@router.get("")
async def list_questions(
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 20,
    search: Annotated[str | None, Query(description="Matches title and content")] = None,
    category: Annotated[str | None, Query(description="Q&A category id")] = None,
):
    """List active questions, newest first."""
    questions, total = QnaService.list_questions(
        page=page,
        limit=limit,
        search=search,
        category_id=category,
    )
    return paginated(questions, page, limit, total)


@router.get("/categories")
async def list_qna_categories():
    return listed(QnaService.list_categories())


@router.get("/{question_id}")
async def get_question(
    question_id: Annotated[str, Path(description="Question id")],
):
    return ok(QnaService.get_question(question_id))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_question(
    body: QuestionCreate,
    request: Request,
    user: AuthUser = Depends(get_current_user),
):
    """Ask a question. The author's id and IP are recorded."""
    question = QnaService.create_question(user.id, _author_ip(request), body)
    return ok(question, message="Question created")


@router.get("/{question_id}/answers")
async def list_answers(
    question_id: Annotated[str, Path(description="Question id")],
):
    """Active answers, oldest first."""
    return listed(QnaService.list_answers(question_id))


@router.post("/{question_id}/answers", status_code=status.HTTP_201_CREATED)
async def create_answer(
    question_id: Annotated[str, Path(description="Question id")],
    body: AnswerCreate,
    request: Request,
    user: AuthUser = Depends(get_current_user),
):
    answer = QnaService.create_answer(question_id, user.id, _author_ip(request), body)
    return ok(answer, message="Answer created")


@router.post("/{question_id}/vote")
async def vote_question(
    question_id: Annotated[str, Path(description="Question id")],
    body: VoteRequest,
    user: AuthUser = Depends(get_current_user),
):
    """Vote up or down. A second vote replaces the first."""
    QnaService.vote(question_id, user.id, body.type)
    return ok({"question_id": question_id, "type": body.type.value}, message="Vote recorded")
