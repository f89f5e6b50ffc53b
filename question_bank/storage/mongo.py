from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING
from pymongo.errors import DuplicateKeyError, OperationFailure

from question_bank.errors import DuplicateError, StoreError
from question_bank.models import Question, StudentAnswer, Subject, User
from question_bank.query.selection import SortSpec
from question_bank.storage.repo import ANSWERS, QUESTIONS, SUBJECTS, USERS, QuestionBankRepository

logger = logging.getLogger(__name__)


class MongoQuestionBankRepository(QuestionBankRepository):
    def __init__(self, mongo_uri: str, db_name: str) -> None:
        self.client = AsyncIOMotorClient(mongo_uri, serverSelectionTimeoutMS=5000, tz_aware=True)
        self.db = self.client[db_name]
        self.users = self.db[USERS]
        self.subjects = self.db[SUBJECTS]
        self.questions = self.db[QUESTIONS]
        self.answers = self.db[ANSWERS]

    async def create_user(self, user: User) -> User:
        try:
            await self.users.insert_one(user.to_document())
        except DuplicateKeyError:
            raise DuplicateError("Email already exists")
        return user

    async def get_user_by_email(self, email: str) -> Optional[User]:
        doc = await self.users.find_one({"email": email})
        return User.model_validate(doc) if doc else None

    async def get_user(self, user_id: str) -> Optional[User]:
        doc = await self.users.find_one({"_id": user_id})
        return User.model_validate(doc) if doc else None

    async def set_user_password(self, user_id: str, password_hash: str) -> None:
        await self.users.update_one({"_id": user_id}, {"$set": {"password": password_hash}})

    async def list_subjects(self) -> List[Subject]:
        docs = await self.subjects.find().to_list(length=None)
        return [Subject.model_validate(d) for d in docs]

    async def create_subject(self, subject: Subject) -> Subject:
        await self.subjects.insert_one(subject.to_document())
        return subject

    async def find_questions(
        self,
        filter_expr: Dict[str, Any],
        projection: Optional[Dict[str, int]] = None,
        sort: Optional[SortSpec] = None,
        skip: int = 0,
        limit: int = 0,
    ) -> List[Dict[str, Any]]:
        cursor = self.questions.find(filter_expr, projection)
        if sort:
            cursor = cursor.sort(sort)
        cursor = cursor.skip(skip).limit(limit)
        try:
            return await cursor.to_list(length=None)
        except OperationFailure as e:
            raise StoreError(e.details.get("errmsg", str(e)) if e.details else str(e))

    async def count_questions(self, filter_expr: Dict[str, Any]) -> int:
        try:
            return await self.questions.count_documents(filter_expr)
        except OperationFailure as e:
            raise StoreError(e.details.get("errmsg", str(e)) if e.details else str(e))

    async def get_question(self, question_id: str) -> Optional[Question]:
        doc = await self.questions.find_one({"_id": question_id})
        return Question.model_validate(doc) if doc else None

    async def create_question(self, question: Question) -> Question:
        await self.questions.insert_one(question.to_document())
        return question

    async def delete_question(self, question_id: str) -> bool:
        result = await self.questions.delete_one({"_id": question_id})
        return result.deleted_count == 1

    async def create_answer(self, answer: StudentAnswer) -> StudentAnswer:
        await self.answers.insert_one(answer.to_document())
        return answer

    async def list_answers(self, student_id: str) -> List[StudentAnswer]:
        cursor = self.answers.find({"studentId": student_id}).sort("createdAt", ASCENDING)
        docs = await cursor.to_list(length=None)
        return [StudentAnswer.model_validate(d) for d in docs]

    async def ensure_indexes(self) -> None:
        await self.users.create_index("email", unique=True)
        await self.questions.create_index("subjectId")
        await self.questions.create_index("createdAt")
        await self.answers.create_index("studentId")
        logger.info("MongoDB indexes ensured")

    async def clear_all(self) -> None:
        for collection in (self.users, self.subjects, self.questions, self.answers):
            await collection.delete_many({})

    async def close(self) -> None:
        self.client.close()
        logger.info("MongoDB connection closed")
