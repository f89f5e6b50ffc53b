import pytest
from pydantic import ValidationError

from question_bank.query.translator import RewriteMode
from question_bank.settings import Settings


def test_operator_rewrite_accepts_known_modes(monkeypatch):
    monkeypatch.setenv("OPERATOR_REWRITE", "structural")
    assert Settings().operator_rewrite == RewriteMode.STRUCTURAL


def test_operator_rewrite_typo_is_rejected(monkeypatch):
    monkeypatch.setenv("OPERATOR_REWRITE", "txt")
    with pytest.raises(ValidationError):
        Settings()


def test_is_production():
    assert Settings(env="production").is_production
    assert not Settings(env="development").is_production
