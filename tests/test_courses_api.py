from tests.helpers import bearer, create_course, register


def test_lecturer_course_lifecycle(client, qa_token):
    token, user = register(client)
    course = create_course(client, token)
    assert course["lecturer"] == {"id": user["id"], "name": "Awa Jallow", "school": "School of ICT"}
    assert course["paymentStatus"] == "Pending"
    assert course["isOverload"] is False
    assert course["overloadType"] is None

    r = client.patch(f"/api/courses/{course['id']}/approve", headers=bearer(qa_token))
    assert r.status_code == 200
    assert r.json()["message"] == "Course status updated to Approved."
    assert r.json()["course"]["paymentStatus"] == "Approved"

    r = client.patch(f"/api/courses/{course['id']}/approve", headers=bearer(qa_token))
    assert r.json()["course"]["paymentStatus"] == "Pending"


def test_list_courses_visible_to_everyone(client):
    token_a, _ = register(client)
    token_b, _ = register(client, name="Lamin Ceesay", email="lamin@utg.edu.gm")
    create_course(client, token_a, title="A")
    create_course(client, token_b, title="B")

    r = client.get("/api/courses", headers=bearer(token_b))
    assert r.status_code == 200
    assert [c["title"] for c in r.json()["courses"]] == ["A", "B"]


def test_get_course(client):
    token, _ = register(client)
    course = create_course(client, token)
    first = client.get(f"/api/courses/{course['id']}", headers=bearer(token)).json()
    second = client.get(f"/api/courses/{course['id']}", headers=bearer(token)).json()
    assert first == second
    assert first["course"]["title"] == "CS101"


def test_unknown_course(client):
    token, _ = register(client)
    r = client.get("/api/courses/999", headers=bearer(token))
    assert r.status_code == 404
    assert r.json()["message"] == "Course not found."
    r = client.put("/api/courses/999", json={"title": "x"}, headers=bearer(token))
    assert r.status_code == 404


def test_create_missing_fields(client):
    token, _ = register(client)
    r = client.post("/api/courses", json={"title": "CS101"}, headers=bearer(token))
    assert r.status_code == 400


def test_create_rejects_bad_values(client):
    token, _ = register(client)
    r = client.post(
        "/api/courses",
        json={"title": "CS101", "semester": "Third", "enrolled": 1, "capacity": 10},
        headers=bearer(token),
    )
    assert r.status_code == 400
    r = client.post(
        "/api/courses",
        json={"title": "CS101", "semester": "First", "enrolled": -1, "capacity": 10},
        headers=bearer(token),
    )
    assert r.status_code == 400


def test_cross_lecturer_edit_is_forbidden(client):
    token_a, _ = register(client)
    token_b, _ = register(client, name="Lamin Ceesay", email="lamin@utg.edu.gm")
    course = create_course(client, token_a)

    r = client.put(f"/api/courses/{course['id']}", json={"title": "Hijacked"}, headers=bearer(token_b))
    assert r.status_code == 403
    assert r.json()["message"] == "Access denied. You can only edit your own courses."

    r = client.get(f"/api/courses/{course['id']}", headers=bearer(token_a))
    assert r.json()["course"]["title"] == "CS101"


def test_owner_edit_ignores_payment_status(client):
    token, _ = register(client)
    course = create_course(client, token)
    r = client.put(
        f"/api/courses/{course['id']}",
        json={"enrolled": 42, "paymentStatus": "Approved"},
        headers=bearer(token),
    )
    assert r.status_code == 200
    assert r.json()["message"] == "Course updated successfully."
    assert r.json()["course"]["enrolled"] == 42
    assert r.json()["course"]["paymentStatus"] == "Pending"


def test_qa_edit_sets_payment_status(client, qa_token):
    token, user = register(client)
    course = create_course(client, token)
    r = client.put(f"/api/courses/{course['id']}", json={"paymentStatus": "Approved"}, headers=bearer(qa_token))
    assert r.status_code == 200
    assert r.json()["course"]["paymentStatus"] == "Approved"
    assert r.json()["course"]["lecturer"]["id"] == user["id"]


def test_clearing_overload_over_http(client):
    token, _ = register(client)
    course = create_course(client, token, isOverload=True, overloadType="Masters")
    assert course["overloadType"] == "Masters"
    r = client.put(
        f"/api/courses/{course['id']}",
        json={"isOverload": False, "overloadType": "Bachelor"},
        headers=bearer(token),
    )
    assert r.json()["course"]["isOverload"] is False
    assert r.json()["course"]["overloadType"] is None


def test_lecturer_cannot_approve(client):
    token, _ = register(client)
    course = create_course(client, token)
    r = client.patch(f"/api/courses/{course['id']}/approve", headers=bearer(token))
    assert r.status_code == 403
    r = client.get(f"/api/courses/{course['id']}", headers=bearer(token))
    assert r.json()["course"]["paymentStatus"] == "Pending"


def test_approve_unknown_course(client, qa_token):
    r = client.patch("/api/courses/999/approve", headers=bearer(qa_token))
    assert r.status_code == 404
