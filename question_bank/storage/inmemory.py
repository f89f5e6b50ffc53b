from __future__ import annotations

import copy
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from question_bank.errors import DuplicateError, StoreError
from question_bank.models import Question, StudentAnswer, Subject, User
from question_bank.query.selection import SortSpec
from question_bank.storage.repo import ANSWERS, COLLECTIONS, QUESTIONS, SUBJECTS, USERS, QuestionBankRepository


def _comparable(a: Any, b: Any) -> bool:
    numbers = (int, float)
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool)
    if isinstance(a, numbers) and isinstance(b, numbers):
        return True
    return type(a) is type(b) or (isinstance(a, datetime) and isinstance(b, datetime))


def _compare(op: Callable[[Any, Any], bool]) -> Callable[[Any, Any], bool]:
    def check(value: Any, operand: Any) -> bool:
        candidates = value if isinstance(value, list) else [value]
        return any(_comparable(c, operand) and op(c, operand) for c in candidates)
    return check


def _equals(value: Any, operand: Any) -> bool:
    if value == operand:
        return True
    return isinstance(value, list) and operand in value


def _member_of(value: Any, operand: Any) -> bool:
    if not isinstance(operand, list):
        raise StoreError("$in needs an array")
    return any(_equals(value, o) for o in operand)


_OPERATORS: Dict[str, Callable[[Any, Any], bool]] = {
    "$gt": _compare(lambda a, b: a > b),
    "$gte": _compare(lambda a, b: a >= b),
    "$lt": _compare(lambda a, b: a < b),
    "$lte": _compare(lambda a, b: a <= b),
    "$in": _member_of,
    "$nin": lambda value, operand: not _member_of(value, operand),
    "$eq": _equals,
    "$ne": lambda value, operand: not _equals(value, operand),
}


def _match_condition(value: Any, condition: Any) -> bool:
    if isinstance(condition, dict) and any(k.startswith("$") for k in condition):
        for op, operand in condition.items():
            check = _OPERATORS.get(op)
            if check is None:
                raise StoreError(f"unknown operator: {op}")
            if not check(value, operand):
                return False
        return True
    return _equals(value, condition)


def matches(document: Dict[str, Any], filter_expr: Dict[str, Any]) -> bool:
    """Evaluate the subset of the MongoDB query language the API emits."""
    for key, condition in filter_expr.items():
        if key == "$and":
            if not all(matches(document, sub) for sub in condition):
                return False
        elif key.startswith("$"):
            raise StoreError(f"unknown top level operator: {key}")
        elif not _match_condition(document.get(key), condition):
            return False
    return True


def project(document: Dict[str, Any], projection: Optional[Dict[str, int]]) -> Dict[str, Any]:
    if not projection:
        return document
    included = {k for k, v in projection.items() if v and k != "_id"}
    excluded = {k for k, v in projection.items() if not v and k != "_id"}
    if included and excluded:
        field = sorted(excluded)[0]
        raise StoreError(f"Cannot do exclusion on field {field} in inclusion projection")
    keep_id = projection.get("_id", 1)
    if included:
        shaped = {k: v for k, v in document.items() if k in included}
    else:
        shaped = {k: v for k, v in document.items() if k not in excluded and k != "_id"}
    if keep_id and "_id" in document:
        shaped = {"_id": document["_id"], **shaped}
    return shaped


def _sort_key(value: Any) -> tuple:
    if value is None:
        return (0, 0)
    if isinstance(value, bool):
        return (4, value)
    if isinstance(value, (int, float)):
        return (1, value)
    if isinstance(value, str):
        return (2, value)
    if isinstance(value, datetime):
        return (3, value.timestamp())
    return (5, str(value))


class InMemoryQuestionBankRepository(QuestionBankRepository):
    def __init__(self) -> None:
        self.collections: Dict[str, Dict[str, Dict[str, Any]]] = {name: {} for name in COLLECTIONS}

    def _insert(self, collection: str, document: Dict[str, Any]) -> None:
        self.collections[collection][document["_id"]] = copy.deepcopy(document)

    def _docs(self, collection: str) -> List[Dict[str, Any]]:
        # Insertion order, like a collection scan
        return [copy.deepcopy(d) for d in self.collections[collection].values()]

    async def create_user(self, user: User) -> User:
        if await self.get_user_by_email(user.email) is not None:
            raise DuplicateError("Email already exists")
        self._insert(USERS, user.to_document())
        return user

    async def get_user_by_email(self, email: str) -> Optional[User]:
        for doc in self.collections[USERS].values():
            if doc["email"] == email:
                return User.model_validate(doc)
        return None

    async def get_user(self, user_id: str) -> Optional[User]:
        doc = self.collections[USERS].get(user_id)
        return User.model_validate(doc) if doc else None

    async def set_user_password(self, user_id: str, password_hash: str) -> None:
        if user_id in self.collections[USERS]:
            self.collections[USERS][user_id]["password"] = password_hash

    async def list_subjects(self) -> List[Subject]:
        return [Subject.model_validate(d) for d in self._docs(SUBJECTS)]

    async def create_subject(self, subject: Subject) -> Subject:
        self._insert(SUBJECTS, subject.to_document())
        return subject

    async def find_questions(
        self,
        filter_expr: Dict[str, Any],
        projection: Optional[Dict[str, int]] = None,
        sort: Optional[SortSpec] = None,
        skip: int = 0,
        limit: int = 0,
    ) -> List[Dict[str, Any]]:
        docs = [d for d in self._docs(QUESTIONS) if matches(d, filter_expr)]
        # Stable sorts applied last key first give a multi-key ordering
        for field, direction in reversed(sort or []):
            docs.sort(key=lambda d: _sort_key(d.get(field)), reverse=direction < 0)
        if skip < 0:
            raise StoreError("skip value must be non-negative")
        docs = docs[skip:]
        if limit:
            docs = docs[:abs(limit)]
        return [project(d, projection) for d in docs]

    async def count_questions(self, filter_expr: Dict[str, Any]) -> int:
        return sum(1 for d in self.collections[QUESTIONS].values() if matches(d, filter_expr))

    async def get_question(self, question_id: str) -> Optional[Question]:
        doc = self.collections[QUESTIONS].get(question_id)
        return Question.model_validate(doc) if doc else None

    async def create_question(self, question: Question) -> Question:
        self._insert(QUESTIONS, question.to_document())
        return question

    async def delete_question(self, question_id: str) -> bool:
        return self.collections[QUESTIONS].pop(question_id, None) is not None

    async def create_answer(self, answer: StudentAnswer) -> StudentAnswer:
        self._insert(ANSWERS, answer.to_document())
        return answer

    async def list_answers(self, student_id: str) -> List[StudentAnswer]:
        return [
            StudentAnswer.model_validate(d)
            for d in self._docs(ANSWERS)
            if d["studentId"] == student_id
        ]

    async def ensure_indexes(self) -> None:
        return None

    async def clear_all(self) -> None:
        for collection in self.collections.values():
            collection.clear()
