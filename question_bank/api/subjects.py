from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status

from question_bank.auth.dependencies import require_admin
from question_bank.auth.jwt_handler import Identity
from question_bank.models import Subject, SubjectCreate
from question_bank.storage.repo import QuestionBankRepository
from question_bank.wiring import get_repo

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/subjects", tags=["subjects"])


@router.get("")
async def get_subjects(repo: QuestionBankRepository = Depends(get_repo)) -> dict:
    subjects = await repo.list_subjects()
    return {
        "success": True,
        "count": len(subjects),
        "data": [s.model_dump(by_alias=True, mode="json", exclude_none=True) for s in subjects],
    }


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_subject(
    req: SubjectCreate,
    current_user: Identity = Depends(require_admin),
    repo: QuestionBankRepository = Depends(get_repo),
) -> dict:
    subject = await repo.create_subject(Subject(**req.model_dump()))
    logger.info(f"Subject {subject.name} created by {current_user.email}")
    return {"success": True, "data": subject.model_dump(by_alias=True, mode="json", exclude_none=True)}
