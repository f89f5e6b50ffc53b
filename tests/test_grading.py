from question_bank.grading import PENDING_REVIEW, grade_answer
from question_bank.models import Question


def _question(**fields):
    base = dict(subject_id="0" * 24, chapter="Algebra", level="easy", question_text="Q", points=2)
    base.update(fields)
    return Question(**base)


def test_true_false_is_case_insensitive():
    q = _question(type="true_false", correct_answer="true")
    answer = grade_answer(q, "TRUE", student_id="s1")
    assert answer.is_correct is True
    assert answer.score == 2
    assert answer.question_id == q.id


def test_wrong_mcq_scores_zero():
    q = _question(type="mcq", options=["x", "2x"], correct_answer="2x")
    answer = grade_answer(q, "x", student_id="s1")
    assert answer.is_correct is False
    assert answer.score == 0


def test_open_text_waits_for_review():
    q = _question(type="open_text", model_answer="Because")
    answer = grade_answer(q, "Because", student_id="s1")
    assert answer.feedback == PENDING_REVIEW
    assert answer.score == 0
