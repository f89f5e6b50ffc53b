# Storage adapters for users, subjects, questions and student answers

from question_bank.storage.inmemory import InMemoryQuestionBankRepository
from question_bank.storage.mongo import MongoQuestionBankRepository
from question_bank.storage.repo import COLLECTIONS, QuestionBankRepository

__all__ = [
    "COLLECTIONS",
    "InMemoryQuestionBankRepository",
    "MongoQuestionBankRepository",
    "QuestionBankRepository",
]
