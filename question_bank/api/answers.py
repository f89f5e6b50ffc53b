from __future__ import annotations

from fastapi import APIRouter, Depends

from question_bank.auth.dependencies import get_current_user
from question_bank.auth.jwt_handler import Identity
from question_bank.storage.repo import QuestionBankRepository
from question_bank.wiring import get_repo

router = APIRouter(prefix="/answers", tags=["answers"])


@router.get("")
async def get_my_answers(
    current_user: Identity = Depends(get_current_user),
    repo: QuestionBankRepository = Depends(get_repo),
) -> dict:
    answers = await repo.list_answers(current_user.user_id)
    return {
        "success": True,
        "count": len(answers),
        "data": [a.model_dump(by_alias=True, mode="json", exclude_none=True) for a in answers],
    }
