from fastapi import APIRouter

from question_bank.api.answers import router as answers_router
from question_bank.api.auth import router as auth_router
from question_bank.api.questions import router as questions_router
from question_bank.api.subjects import router as subjects_router

router = APIRouter(prefix="/api")
router.include_router(auth_router)
router.include_router(questions_router)
router.include_router(subjects_router)
router.include_router(answers_router)
