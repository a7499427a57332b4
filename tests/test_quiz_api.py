import uuid
from datetime import timedelta

from quizroom.models.quiz_db import quiz_crud
from quizroom.models.quiz_db.question_db import Question
from quizroom.models.user_db.user_db_crud import create_user
from quizroom.schemas.quiz.quiz_base import QuizCreate
from quizroom.schemas.users.user_base import UserCreate
from quizroom.services.codes import CODE_ALPHABET


def test_create_quiz_requires_login(client):
    r = client.post("/api/quizzes", json={"title": "Nope"})
    assert r.status_code == 401


def test_create_quiz(api, host, clock):
    quiz = api.create_quiz(host, title="Capitals", deadline=clock.now + timedelta(hours=1))
    assert len(quiz["code"]) == 6
    assert set(quiz["code"]) <= set(CODE_ALPHABET)
    assert quiz["adminName"] == "host_user"
    assert quiz["active"] is True
    assert quiz["started"] is False
    assert quiz["deadline"].startswith("2026-03-01T13:00:00")


def test_timezone_aware_deadline_is_stored_as_utc(client, host):
    r = client.post(
        "/api/quizzes",
        json={"title": "TZ", "deadline": "2026-03-01T15:00:00+02:00"},
        headers=host,
    )
    assert r.json()["deadline"].startswith("2026-03-01T13:00:00")


def test_public_view_hides_answers(client, api, host):
    quiz = api.create_quiz(host)
    api.add_question(host, quiz["code"], content="Capital of France?", type="single-choice",
                     choices=["Paris", "Rome"], answer="Paris", points=2)
    api.join(quiz["code"], "ana")

    r = client.get(f"/api/quizzes/{quiz['code']}")
    assert r.status_code == 200
    body = r.json()
    assert body["participants"] == ["ana"]
    assert body["questions"][0]["choices"] == ["Paris", "Rome"]
    assert "answer" not in body["questions"][0]


def test_unknown_quiz_is_not_found(client):
    r = client.get("/api/quizzes/ZZZZZZ")
    assert r.status_code == 404
    assert r.json() == {"kind": "not_found", "detail": "Quiz not found"}


def test_only_owner_can_update_or_start(client, api, host):
    quiz = api.create_quiz(host)
    other = api.signup("someone_else")

    r = client.patch(f"/api/quizzes/{quiz['code']}", json={"title": "Hijacked"}, headers=other)
    assert r.status_code == 403
    assert r.json()["kind"] == "forbidden"

    r = client.patch(f"/api/quizzes/{quiz['code']}", json={"title": "Renamed", "active": False}, headers=host)
    assert r.status_code == 200
    assert r.json()["title"] == "Renamed"
    assert r.json()["active"] is False

    assert client.post(f"/api/quizzes/{quiz['code']}/start", headers=other).status_code == 403
    r = client.post(f"/api/quizzes/{quiz['code']}/start", headers=host)
    assert r.json()["started"] is True


def test_list_my_quizzes_is_paginated(client, api, host):
    for i in range(3):
        api.create_quiz(host, title=f"Quiz {i}")
    api.create_quiz(api.signup("another_host"), title="Not mine")

    r = client.get("/api/user/quizzes?page=1&size=2", headers=host)
    body = r.json()
    assert body["total"] == 3
    assert len(body["items"]) == 2
    assert body["hasNext"] is True
    assert body["hasPrev"] is False
    assert body["items"][0]["questionCount"] == 0

    r = client.get("/api/user/quizzes?page=2&size=2", headers=host)
    assert len(r.json()["items"]) == 1


def test_question_answer_must_be_a_choice(client, api, host):
    quiz = api.create_quiz(host)
    r = client.post(
        f"/api/quizzes/{quiz['code']}/questions",
        json={"content": "Pick", "type": "single-choice", "choices": ["a", "b"], "answer": "c"},
        headers=host,
    )
    assert r.status_code == 422

    r = client.post(
        f"/api/quizzes/{quiz['code']}/questions",
        json={"content": "Pick", "type": "multi-choice", "choices": ["a", "b"], "answer": "a"},
        headers=host,
    )
    assert r.status_code == 422


def test_question_type_must_be_known(client, api, host):
    quiz = api.create_quiz(host)
    r = client.post(
        f"/api/quizzes/{quiz['code']}/questions",
        json={"content": "Essay", "type": "essay", "answer": "x"},
        headers=host,
    )
    assert r.status_code == 422


def test_only_owner_can_add_questions(client, api, host):
    quiz = api.create_quiz(host)
    other = api.signup("intruder")
    r = client.post(
        f"/api/quizzes/{quiz['code']}/questions",
        json={"content": "2+2?", "type": "text", "answer": "4"},
        headers=other,
    )
    assert r.status_code == 403


def test_edit_and_delete_question_before_submissions(client, api, host):
    quiz = api.create_quiz(host)
    q = api.add_question(host, quiz["code"], content="2+2?", type="text", answer="4")
    assert q["points"] == 1

    r = client.patch(f"/api/quizzes/{quiz['code']}/questions/{q['id']}", json={"points": 5}, headers=host)
    assert r.status_code == 200
    assert r.json()["points"] == 5
    assert r.json()["answer"] == "4"

    r = client.patch(
        f"/api/quizzes/{quiz['code']}/questions/{q['id']}",
        json={"type": "single-choice"},
        headers=host,
    )
    assert r.status_code == 400
    assert r.json()["kind"] == "validation_error"

    r = client.delete(f"/api/quizzes/{quiz['code']}/questions/{q['id']}", headers=host)
    assert r.json() == {"ok": True}
    assert client.get(f"/api/quizzes/{quiz['code']}").json()["questions"] == []


def test_questions_are_frozen_after_first_submission(client, api, host):
    quiz = api.create_quiz(host)
    q = api.add_question(host, quiz["code"], content="2+2?", type="text", answer="4")
    participant = api.join(quiz["code"], "ana")
    assert api.submit(quiz["code"], participant["id"], {q["id"]: "4"}).status_code == 200

    r = client.patch(f"/api/quizzes/{quiz['code']}/questions/{q['id']}", json={"answer": "5"}, headers=host)
    assert r.status_code == 409
    r = client.delete(f"/api/quizzes/{quiz['code']}/questions/{q['id']}", headers=host)
    assert r.status_code == 409


def test_questions_are_listed_in_order(client, api, host):
    quiz = api.create_quiz(host)
    api.add_question(host, quiz["code"], content="second", type="text", answer="b", order=2)
    api.add_question(host, quiz["code"], content="first", type="text", answer="a", order=1)

    questions = client.get(f"/api/quizzes/{quiz['code']}").json()["questions"]
    assert [q["content"] for q in questions] == ["first", "second"]


def test_questions_with_equal_order_are_sorted_by_id(db):
    owner = create_user(db, UserCreate(name="owner", password="secret123"))
    quiz = quiz_crud.create_quiz(db, QuizCreate(title="Ties"), admin_id=owner.id)
    late_id = uuid.UUID("ffffffff-ffff-ffff-ffff-ffffffffffff")
    early_id = uuid.UUID("00000000-0000-0000-0000-000000000001")
    db.add(Question(id=late_id, quiz_id=quiz.id, content="added first", type="text", answer="a"))
    db.add(Question(id=early_id, quiz_id=quiz.id, content="added second", type="text", answer="b"))
    db.commit()
    db.expire_all()

    assert [q.id for q in quiz.questions] == [early_id, late_id]
