from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from question_bank.models.common import Document, new_object_id, utcnow


class SubjectCreate(Document):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)


class Subject(SubjectCreate):
    id: str = Field(default_factory=new_object_id, alias="_id")
    created_at: datetime = Field(default_factory=utcnow)
