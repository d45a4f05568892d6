# =============================================================================
# core/services/qna_service.py - Doctor Q&A Board
# =============================================================================
# Questions, answers, categories and per-user votes. Authors are recorded
# by user id and by IP (first X-Forwarded-For hop or the peer address).
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from lib.supabase_client import SupabaseClient
from lib.query_builder import QueryBuilder
from lib.utils import validate_required_fields
from app.exceptions import BadRequestError, MissingFieldsError, ResourceNotFoundError
from core.models.community import AnswerCreate, QuestionCreate, VoteType

logger = logging.getLogger(__name__)

QUESTION_TABLE = "questions"
ANSWER_TABLE = "answers"
CATEGORY_TABLE = "qna_categories"
VOTE_TABLE = "question_votes"


class QnaService:
    """Service for Q&A operations."""

    @staticmethod
    def attach_categories(questions: list[dict[str, Any]]) -> None:
        """Set question["category"] to {id, name, slug} or None."""
        category_ids = list({q["category_id"] for q in questions if q.get("category_id")})
        categories = {}
        if category_ids:
            client = SupabaseClient.get_client()
            categories = {
                row["id"]: row
                for row in (
                    client.table(CATEGORY_TABLE).select("id, name, slug").in_("id", category_ids).execute()
                ).data or []
            }

        for question in questions:
            question["category"] = categories.get(question.get("category_id"))

    @staticmethod
    def list_questions(
        page: int = 1,
        limit: int = 20,
        search: str | None = None,
        category_id: str | None = None,
    ) -> tuple[list[dict[str, Any]], int]:
        """Active questions, newest first, each with its category."""
        client = SupabaseClient.get_client()
        questions, total = (
            QueryBuilder(client.table(QUESTION_TABLE).select("*", count="exact").eq("is_active", True))
            .search(search, ["title", "content"])
            .filter(category_id, lambda q: q.eq("category_id", category_id))
            .sort("created_at", "desc")
            .paginate(page, limit)
            .execute()
        )

        QnaService.attach_categories(questions)
        return questions, total

    @staticmethod
    def list_categories() -> list[dict[str, Any]]:
        client = SupabaseClient.get_client()
        return (client.table(CATEGORY_TABLE).select("*").order("name").execute()).data or []

    @staticmethod
    def get_question(question_id: str | UUID) -> dict[str, Any]:
        question = SupabaseClient.fetch_one(QUESTION_TABLE, question_id)
        if not question:
            raise ResourceNotFoundError("Question", question_id)

        QnaService.attach_categories([question])
        return question

    @staticmethod
    def create_question(
        author_id: str | UUID,
        author_ip: str | None,
        request: QuestionCreate,
    ) -> dict[str, Any]:
        """
        Create a question.

        Raises:
            MissingFieldsError: title or content blank
        """
        missing = validate_required_fields(request.model_dump(), ["title", "content"])
        if missing:
            raise MissingFieldsError(missing)

        question = SupabaseClient.insert_one(
            QUESTION_TABLE,
            {
                "title": request.title,
                "content": request.content,
                "author_id": str(author_id),
                "author_ip": author_ip or "",
                "category_id": request.category_id or None,
            },
        )
        logger.info(f"Created question {question['id']} by {author_id}")
        return question

    @staticmethod
    def list_answers(question_id: str | UUID) -> list[dict[str, Any]]:
        """Active answers, oldest first."""
        client = SupabaseClient.get_client()
        return (
            client.table(ANSWER_TABLE)
            .select("*")
            .eq("question_id", str(question_id))
            .eq("is_active", True)
            .order("created_at")
            .execute()
        ).data or []

    @staticmethod
    def create_answer(
        question_id: str | UUID,
        author_id: str | UUID,
        author_ip: str | None,
        request: AnswerCreate,
    ) -> dict[str, Any]:
        if validate_required_fields(request.model_dump(), ["content"]):
            raise MissingFieldsError(["content"])

        answer = SupabaseClient.insert_one(
            ANSWER_TABLE,
            {
                "question_id": str(question_id),
                "content": request.content,
                "author_id": str(author_id),
                "author_ip": author_ip or "",
            },
        )
        logger.info(f"Created answer {answer['id']} on question {question_id}")
        return answer

    @staticmethod
    def vote(question_id: str | UUID, user_id: str | UUID, vote_type: VoteType | None) -> None:
        """
        Record a user's vote, replacing their previous vote on the question.

        Raises:
            BadRequestError: vote_type missing
        """
        if vote_type is None:
            raise BadRequestError("Vote type is required", suggestion="Send {\"type\": \"up\"} or {\"type\": \"down\"}")

        client = SupabaseClient.get_client()
        existing = (
            client.table(VOTE_TABLE)
            .select("id")
            .eq("question_id", str(question_id))
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        ).data

        if existing:
            SupabaseClient.update_rows(VOTE_TABLE, {"vote_type": vote_type.value}, existing[0]["id"])
        else:
            SupabaseClient.insert_one(
                VOTE_TABLE,
                {"question_id": str(question_id), "user_id": str(user_id), "vote_type": vote_type.value},
            )

        logger.info(f"Vote {vote_type.value} on question {question_id} by {user_id}")
