"""Cross-survey student profiles and class insights."""

API = "/api/v1/reports"


def test_student_profiles_cover_the_roster(client, world):
    r = client.get(f"{API}/students", headers=world.headers(world.teacher))
    assert r.status_code == 200, r.text
    profiles = r.json()

    assert [p["student_name"] for p in profiles] == ["Ana Alvarez", "Ben Brooks", "Cleo Carter", "Dev Dutta"]
    ana, ben, cleo, dev = profiles

    assert (ana["overall_score"], ana["tier"], ana["response_count"]) == (4.8, "excelling", 4)
    assert ana["last_response_at"] == "2024-03-08T09:00:00"
    assert sorted((s["survey_title"], s["score"]) for s in ana["survey_scores"]) == [
        ("Week 1 check-in", 4.5), ("Week 2 check-in", 5.0),
    ]
    assert (ben["overall_score"], ben["tier"]) == (3.0, "struggling")
    assert "Schedule one-on-one meeting" in ben["recommendations"]

    for p in (cleo, dev):
        assert (p["overall_score"], p["response_count"], p["tier"]) == (0.0, 0, "no_data")
        assert p["survey_scores"] == []
        assert p["weaknesses"] == ["No survey responses"]


def test_student_profiles_tier_filter(client, world):
    r = client.get(f"{API}/students", params={"tier": "no_data"}, headers=world.headers(world.teacher))
    assert [p["student_name"] for p in r.json()] == ["Cleo Carter", "Dev Dutta"]


def test_profiles_limited_to_own_courses(client, world):
    r = client.get(f"{API}/students", headers=world.headers(world.other_teacher))
    assert r.json() == []

    r = client.get(f"{API}/students", params={"course_id": str(world.other_course.id)},
                   headers=world.headers(world.teacher))
    assert r.json() == []


def test_insights(client, world):
    r = client.get(f"{API}/insights", headers=world.headers(world.teacher))
    assert r.status_code == 200, r.text
    body = r.json()

    assert body["student_count"] == 4
    assert body["class_average"] == 2.0
    assert body["participation_rate"] == 50.0
    assert [p["student_name"] for p in body["top_performers"]] == ["Ana Alvarez"]
    assert [p["student_name"] for p in body["struggling_students"]] == ["Ben Brooks"]
    assert body["recommendations"] == [
        "Consider reaching out to 1 students with low scores",
        "Consider sending reminders to increase survey participation",
    ]


def test_insights_for_admin_match_teacher(client, world):
    teacher = client.get(f"{API}/insights", headers=world.headers(world.teacher)).json()
    admin = client.get(f"{API}/insights", params={"course_id": str(world.course.id)},
                       headers=world.headers(world.admin)).json()
    assert admin == teacher


def test_insights_without_students(client, world):
    r = client.get(f"{API}/insights", headers=world.headers(world.other_teacher))
    body = r.json()
    assert (body["student_count"], body["class_average"], body["participation_rate"]) == (0, 0.0, 0.0)
    assert body["recommendations"] == []
