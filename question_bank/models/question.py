"""
Question model.

Stored documents use the camelCase field names clients filter on
(``subjectId``, ``questionText``, ``createdAt``...).
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field, model_validator

from question_bank.models.common import Document, new_object_id, utcnow


class QuestionType(str, Enum):
    TRUE_FALSE = "true_false"
    MCQ = "mcq"
    COMPLETE = "complete"  # fill in the blank
    OPEN_TEXT = "open_text"


class QuestionLevel(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


# Answer-bearing fields only administrators may see
REDACTED_FIELDS = ("correctAnswer", "modelAnswer")

# Declared value types of filterable fields; anything unlisted is a string
QUESTION_FIELD_TYPES = {
    "points": int,
    "createdAt": datetime,
}

OBJECTIVE_TYPES = (QuestionType.TRUE_FALSE, QuestionType.MCQ, QuestionType.COMPLETE)


class QuestionCreate(Document):
    """Request body for POST /api/questions."""
    subject_id: str
    chapter: str = Field(..., min_length=1)
    level: QuestionLevel
    type: QuestionType
    question_text: str = Field(..., min_length=1)
    options: Optional[List[str]] = None
    correct_answer: Optional[str] = None
    model_answer: Optional[str] = None
    points: int = Field(1, ge=0)

    @model_validator(mode="after")
    def check_type_fields(self):
        kind = QuestionType(self.type)
        if kind == QuestionType.MCQ:
            if not self.options or len(self.options) < 2:
                raise ValueError("Multiple choice questions need at least two options")
        elif self.options:
            raise ValueError("Options are only allowed for multiple choice questions")

        if kind == QuestionType.OPEN_TEXT:
            if self.correct_answer is not None:
                raise ValueError("Open text questions take a model answer, not a correct answer")
        else:
            if not self.correct_answer:
                raise ValueError("Please add a correct answer")
            if self.model_answer is not None:
                raise ValueError("A model answer is only allowed for open text questions")
        return self


class Question(QuestionCreate):
    id: str = Field(default_factory=new_object_id, alias="_id")
    user: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)


def redact(document: dict) -> dict:
    """Return a copy of a question document without answer-bearing fields."""
    return {k: v for k, v in document.items() if k not in REDACTED_FIELDS}
