import pytest

from quizroom.core.errors import Conflict
from quizroom.models.quiz_db import quiz_crud
from quizroom.models.user_db.user_db_crud import create_user
from quizroom.schemas.quiz.quiz_base import QuizCreate
from quizroom.schemas.users.user_base import UserCreate
from quizroom.services.codes import CODE_ALPHABET, generate_code


def test_alphabet_excludes_confusable_characters():
    for ch in "0O1IL":
        assert ch not in CODE_ALPHABET


def test_generated_codes_use_the_alphabet():
    for _ in range(200):
        code = generate_code(6)
        assert len(code) == 6
        assert set(code) <= set(CODE_ALPHABET)


@pytest.fixture
def owner(db):
    return create_user(db, UserCreate(name="owner", password="secret123"))


def test_create_quiz_retries_on_taken_code(db, owner, monkeypatch):
    codes = iter(["AAAAAA", "AAAAAA", "BBBBBB"])
    monkeypatch.setattr(quiz_crud, "generate_code", lambda length: next(codes))

    first = quiz_crud.create_quiz(db, QuizCreate(title="One"), admin_id=owner.id)
    second = quiz_crud.create_quiz(db, QuizCreate(title="Two"), admin_id=owner.id)

    assert first.code == "AAAAAA"
    assert second.code == "BBBBBB"


def test_create_quiz_gives_up_after_max_attempts(db, owner, monkeypatch):
    monkeypatch.setattr(quiz_crud, "generate_code", lambda length: "CCCCCC")
    monkeypatch.setattr(quiz_crud.settings, "QUIZ_CODE_MAX_ATTEMPTS", 3)
    quiz_crud.create_quiz(db, QuizCreate(title="Taken"), admin_id=owner.id)

    with pytest.raises(Conflict):
        quiz_crud.create_quiz(db, QuizCreate(title="Again"), admin_id=owner.id)


def test_exhausted_code_space_is_a_conflict_response(client, host, monkeypatch):
    monkeypatch.setattr(quiz_crud, "generate_code", lambda length: "CCCCCC")
    monkeypatch.setattr(quiz_crud.settings, "QUIZ_CODE_MAX_ATTEMPTS", 2)
    assert client.post("/api/quizzes", json={"title": "Taken"}, headers=host).status_code == 200

    r = client.post("/api/quizzes", json={"title": "Again"}, headers=host)
    assert r.status_code == 409
    assert r.json() == {"kind": "conflict", "detail": "Could not allocate a unique quiz code"}
