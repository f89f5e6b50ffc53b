"""Marking of submitted answers."""

from __future__ import annotations

from question_bank.models import Question, QuestionType, StudentAnswer

PENDING_REVIEW = "Pending review"


def normalize(text: str) -> str:
    return " ".join(text.split()).casefold()


def grade_answer(question: Question, answer: str, student_id: str) -> StudentAnswer:
    """
    Mark ``answer`` against ``question``.

    True/false, multiple choice and fill-in-the-blank answers are compared
    with the correct answer ignoring case and surrounding whitespace.
    Open text answers are stored unmarked for a reviewer.
    """
    if QuestionType(question.type) == QuestionType.OPEN_TEXT or question.correct_answer is None:
        return StudentAnswer(
            student_id=student_id,
            question_id=question.id,
            answer=answer,
            is_correct=False,
            feedback=PENDING_REVIEW,
            score=0,
        )

    is_correct = normalize(answer) == normalize(question.correct_answer)
    return StudentAnswer(
        student_id=student_id,
        question_id=question.id,
        answer=answer,
        is_correct=is_correct,
        feedback="Correct answer!" if is_correct else "Incorrect answer",
        score=question.points if is_correct else 0,
    )
