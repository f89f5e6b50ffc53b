from __future__ import annotations

from functools import lru_cache

from question_bank.mailer import LoggingMailer, Mailer, SmtpMailer
from question_bank.settings import settings
from question_bank.storage.inmemory import InMemoryQuestionBankRepository
from question_bank.storage.mongo import MongoQuestionBankRepository
from question_bank.storage.repo import QuestionBankRepository


@lru_cache
def get_repo() -> QuestionBankRepository:
    backend = (settings.storage_backend or "inmemory").lower()
    if backend == "mongo":
        return MongoQuestionBankRepository(settings.mongodb_uri, settings.mongodb_db)
    return InMemoryQuestionBankRepository()


@lru_cache
def get_mailer() -> Mailer:
    backend = (settings.mail_backend or "log").lower()
    if backend == "smtp":
        return SmtpMailer(
            host=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.smtp_username,
            password=settings.smtp_password,
            sender=settings.smtp_from,
            use_tls=settings.smtp_use_tls,
        )
    return LoggingMailer()
