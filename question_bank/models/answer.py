from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from question_bank.models.common import Document, new_object_id, utcnow


class AnswerSubmit(BaseModel):
    answer: str = Field(..., min_length=1)


class StudentAnswer(Document):
    id: str = Field(default_factory=new_object_id, alias="_id")
    student_id: str
    question_id: str
    answer: str
    is_correct: bool = False
    feedback: Optional[str] = None
    score: int = 0
    created_at: datetime = Field(default_factory=utcnow)
