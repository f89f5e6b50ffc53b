from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from question_bank.models import Question, StudentAnswer, Subject, User
from question_bank.query.selection import SortSpec

USERS = "users"
SUBJECTS = "subjects"
QUESTIONS = "questions"
ANSWERS = "studentAnswers"

COLLECTIONS = (USERS, SUBJECTS, QUESTIONS, ANSWERS)


class QuestionBankRepository(ABC):
    # ----- users -----
    @abstractmethod
    async def create_user(self, user: User) -> User:
        """Persist a user; raises DuplicateError when the email is taken."""
        raise NotImplementedError

    @abstractmethod
    async def get_user_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    @abstractmethod
    async def get_user(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    @abstractmethod
    async def set_user_password(self, user_id: str, password_hash: str) -> None:
        raise NotImplementedError

    # ----- subjects -----
    @abstractmethod
    async def list_subjects(self) -> List[Subject]:
        raise NotImplementedError

    @abstractmethod
    async def create_subject(self, subject: Subject) -> Subject:
        raise NotImplementedError

    # ----- questions -----
    @abstractmethod
    async def find_questions(
        self,
        filter_expr: Dict[str, Any],
        projection: Optional[Dict[str, int]] = None,
        sort: Optional[SortSpec] = None,
        skip: int = 0,
        limit: int = 0,
    ) -> List[Dict[str, Any]]:
        """Matching question documents, shaped by ``projection``."""
        raise NotImplementedError

    @abstractmethod
    async def count_questions(self, filter_expr: Dict[str, Any]) -> int:
        raise NotImplementedError

    @abstractmethod
    async def get_question(self, question_id: str) -> Optional[Question]:
        raise NotImplementedError

    @abstractmethod
    async def create_question(self, question: Question) -> Question:
        raise NotImplementedError

    @abstractmethod
    async def delete_question(self, question_id: str) -> bool:
        raise NotImplementedError

    # ----- student answers -----
    @abstractmethod
    async def create_answer(self, answer: StudentAnswer) -> StudentAnswer:
        raise NotImplementedError

    @abstractmethod
    async def list_answers(self, student_id: str) -> List[StudentAnswer]:
        raise NotImplementedError

    async def answered_question_ids(self, student_id: str) -> List[str]:
        return [a.question_id for a in await self.list_answers(student_id)]

    # ----- maintenance -----
    @abstractmethod
    async def ensure_indexes(self) -> None:
        raise NotImplementedError

    @abstractmethod
    async def clear_all(self) -> None:
        raise NotImplementedError

    async def close(self) -> None:
        return None
