"""
Seed script for the question bank.

Wipes users, subjects, questions and student answers, then inserts the
fixture set: one admin, one student, two subjects, six questions and two
answers.

Usage:
    python -m question_bank.seed
    python -m question_bank.seed --skip-indexes
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Dict

from pymongo.errors import PyMongoError

from question_bank.auth.password import hash_password
from question_bank.models import Question, StudentAnswer, Subject, User, UserRole
from question_bank.observability import configure_logging
from question_bank.settings import settings
from question_bank.storage.repo import QuestionBankRepository
from question_bank.wiring import get_repo

logger = logging.getLogger(__name__)

ADMIN_EMAIL = "admin@questionbank.com"
ADMIN_PASSWORD = "admin123"
STUDENT_EMAIL = "student@questionbank.com"
STUDENT_PASSWORD = "student123"


async def clear_database(repo: QuestionBankRepository) -> None:
    await repo.clear_all()


async def seed_database(repo: QuestionBankRepository) -> Dict[str, object]:
    """Insert the fixture set and return the created records by role."""
    admin = await repo.create_user(
        User(email=ADMIN_EMAIL, password=hash_password(ADMIN_PASSWORD), role=UserRole.ADMIN)
    )
    student = await repo.create_user(
        User(email=STUDENT_EMAIL, password=hash_password(STUDENT_PASSWORD), role=UserRole.STUDENT)
    )

    math = await repo.create_subject(Subject(name="Mathematics", description="Algebra, Calculus, Geometry"))
    cs = await repo.create_subject(
        Subject(name="Computer Science", description="Programming, Algorithms, Data Structures")
    )

    fixtures = [
        # Math questions
        dict(subject_id=math.id, chapter="Algebra", level="easy", type="true_false",
             question_text="2 + 2 equals 4", correct_answer="true", points=1),
        dict(subject_id=math.id, chapter="Calculus", level="medium", type="mcq",
             question_text="What is the derivative of x²?", options=["x", "2x", "x²", "2"],
             correct_answer="2x", points=2),
        dict(subject_id=math.id, chapter="Geometry", level="hard", type="open_text",
             question_text="Explain the Pythagorean theorem",
             model_answer="In a right triangle, the square of the hypotenuse equals the sum of "
                          "the squares of the other two sides.",
             points=3),
        # CS questions
        dict(subject_id=cs.id, chapter="Programming", level="easy", type="complete",
             question_text="In JavaScript, the === operator performs ______ equality check",
             correct_answer="strict", points=1),
        dict(subject_id=cs.id, chapter="Algorithms", level="medium", type="mcq",
             question_text="What is the time complexity of binary search?",
             options=["O(1)", "O(n)", "O(log n)", "O(n²)"], correct_answer="O(log n)", points=2),
        dict(subject_id=cs.id, chapter="Data Structures", level="hard", type="open_text",
             question_text="Describe the difference between a stack and a queue",
             model_answer="A stack is LIFO (Last In First Out) while a queue is FIFO (First In First Out)",
             points=3),
    ]
    questions = []
    for fields in fixtures:
        questions.append(await repo.create_question(Question(user=admin.id, **fields)))

    answers = [
        await repo.create_answer(StudentAnswer(
            student_id=student.id, question_id=questions[0].id, answer="true",
            is_correct=True, feedback="Correct answer!", score=1,
        )),
        await repo.create_answer(StudentAnswer(
            student_id=student.id, question_id=questions[1].id, answer="x",
            is_correct=False, feedback="Incorrect, the derivative of x² is 2x", score=0,
        )),
    ]

    return {
        "admin": admin,
        "student": student,
        "subjects": [math, cs],
        "questions": questions,
        "answers": answers,
    }


async def run_seed(repo: QuestionBankRepository, skip_indexes: bool = False) -> None:
    try:
        if not skip_indexes:
            await repo.ensure_indexes()
        await clear_database(repo)
        logger.info("Database cleared")
        await seed_database(repo)
        logger.info("Database seeded successfully")
    finally:
        await repo.close()


def main() -> None:
    parser = argparse.ArgumentParser(description="Reset the question bank database to the fixture set")
    parser.add_argument("--skip-indexes", action="store_true", help="Skip index creation")
    args = parser.parse_args()

    configure_logging(settings.log_level)
    if settings.storage_backend.lower() != "mongo":
        logger.warning("STORAGE_BACKEND is not 'mongo'; seeding an in-memory store that exits with this process")

    try:
        asyncio.run(run_seed(get_repo(), skip_indexes=args.skip_indexes))
    except PyMongoError as e:
        logger.error(f"Error seeding database: {str(e)}")
        sys.exit(1)


if __name__ == "__main__":
    main()
