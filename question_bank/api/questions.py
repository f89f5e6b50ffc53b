from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, Request, status

from question_bank.auth.dependencies import get_current_user, require_admin
from question_bank.auth.jwt_handler import Identity
from question_bank.errors import InvalidInputError, NotFoundError
from question_bank.grading import grade_answer
from question_bank.models import (
    QUESTION_FIELD_TYPES, AnswerSubmit, Question, QuestionCreate, is_valid_object_id, redact
)
from question_bank.observability import get_tracer
from question_bank.query import RESERVED_PARAMETERS, paginate, parse_query_params, parse_select, parse_sort, translate
from question_bank.settings import settings
from question_bank.storage.repo import QuestionBankRepository
from question_bank.wiring import get_repo

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/questions", tags=["questions"])
tracer = get_tracer()


def _single(value: Any) -> Optional[str]:
    """Last occurrence of a repeated plain parameter."""
    if isinstance(value, list):
        return value[-1] if value else None
    if isinstance(value, dict):
        return None
    return value


def _question_data(question: Question, identity: Identity) -> dict:
    data = question.model_dump(by_alias=True, mode="json", exclude_none=True)
    return data if identity.is_admin else redact(data)


async def _load_question(question_id: str, repo: QuestionBankRepository) -> Question:
    if not is_valid_object_id(question_id):
        raise InvalidInputError("Invalid question ID format")
    question = await repo.get_question(question_id)
    if question is None:
        raise NotFoundError(f"Question not found with id of {question_id}")
    return question


@router.get("")
async def get_questions(
    request: Request,
    current_user: Identity = Depends(get_current_user),
    repo: QuestionBankRepository = Depends(get_repo),
) -> dict:
    """
    List questions.

    Any non-reserved parameter filters on the field of the same name;
    ``field[gt|gte|lt|lte|in]=value`` compares. ``solved=true|false`` keeps
    only questions the caller has (or has not) answered.
    """
    raw = parse_query_params(request.query_params.multi_items())
    solved_flag = _single(raw.get("solved"))

    with tracer.start_as_current_span("questions.build_filter"):
        solved_ids = None
        if solved_flag:
            solved_ids = await repo.answered_question_ids(current_user.user_id)

        filter_expr = translate(
            raw,
            RESERVED_PARAMETERS,
            solved_ids,
            solved_flag,
            mode=settings.operator_rewrite,
            field_types=QUESTION_FIELD_TYPES,
        )

    # Count and page are separate reads; a concurrent write between them can
    # leave the descriptor one page off.
    total = await repo.count_questions(filter_expr)
    page = paginate(_single(raw.get("page")), _single(raw.get("limit")), total, settings.default_page_limit)

    docs = await repo.find_questions(
        filter_expr,
        projection=parse_select(_single(raw.get("select"))),
        sort=parse_sort(_single(raw.get("sort"))),
        skip=page.skip,
        limit=page.limit,
    )
    if not current_user.is_admin:
        docs = [redact(d) for d in docs]

    return {
        "success": True,
        "count": len(docs),
        "pagination": page.descriptor,
        "data": docs,
    }


@router.get("/{question_id}")
async def get_question(
    question_id: str,
    current_user: Identity = Depends(get_current_user),
    repo: QuestionBankRepository = Depends(get_repo),
) -> dict:
    question = await _load_question(question_id, repo)
    return {"success": True, "data": _question_data(question, current_user)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_question(
    req: QuestionCreate,
    current_user: Identity = Depends(require_admin),
    repo: QuestionBankRepository = Depends(get_repo),
) -> dict:
    if not is_valid_object_id(req.subject_id):
        raise InvalidInputError("Invalid subject ID format")

    question = Question(**req.model_dump(), user=current_user.user_id)
    await repo.create_question(question)

    logger.info(f"Question {question.id} created by {current_user.email}")
    return {"success": True, "data": question.model_dump(by_alias=True, mode="json", exclude_none=True)}


@router.delete("/{question_id}")
async def delete_question(
    question_id: str,
    current_user: Identity = Depends(require_admin),
    repo: QuestionBankRepository = Depends(get_repo),
) -> dict:
    not_found = NotFoundError(f"Question not found with id of {question_id}")
    if not is_valid_object_id(question_id) or await repo.get_question(question_id) is None:
        raise not_found

    if not await repo.delete_question(question_id):
        raise not_found

    logger.info(f"Question {question_id} deleted by {current_user.email}")
    return {"success": True, "data": {}}


@router.post("/{question_id}/answers", status_code=status.HTTP_201_CREATED)
async def answer_question(
    question_id: str,
    req: AnswerSubmit,
    current_user: Identity = Depends(get_current_user),
    repo: QuestionBankRepository = Depends(get_repo),
) -> dict:
    question = await _load_question(question_id, repo)

    answer = grade_answer(question, req.answer, student_id=current_user.user_id)
    await repo.create_answer(answer)

    logger.info(f"Answer recorded for question {question_id} by {current_user.email}")
    return {"success": True, "data": answer.model_dump(by_alias=True, mode="json", exclude_none=True)}
