"""Per-survey reports: student list, class summary and exports."""
import csv
import io

from openpyxl import load_workbook

from schoolhub.models.audit import AuditLog

API = "/api/v1/reports"


def _students(client, world, **params):
    r = client.get(f"{API}/surveys/{world.survey.id}/students",
                   params=params, headers=world.headers(world.teacher))
    assert r.status_code == 200, r.text
    return r.json()


def test_student_performance(client, world):
    rows = _students(client, world)
    ana, ben, cleo, _ = world.students

    assert [r["student_id"] for r in rows] == [str(ana.id), str(ben.id), str(cleo.id)]
    assert rows[0] == {
        "student_id": str(ana.id),
        "student_name": "Ana Alvarez",
        "average_score": 4.5,
        "response_count": 3,
        "last_response_at": "2024-03-01T09:03:00",
        "tier": "excelling",
    }
    assert (rows[1]["average_score"], rows[1]["tier"]) == (3.0, "struggling")
    assert (rows[2]["average_score"], rows[2]["response_count"], rows[2]["tier"]) == (0.0, 1, "no_data")


def test_student_filters(client, world):
    assert [r["student_name"] for r in _students(client, world, tier="no_data")] == ["Cleo Carter"]
    assert [r["student_name"] for r in _students(client, world, q="BEN")] == ["Ben Brooks"]
    assert _students(client, world, tier="good") == []


def test_unknown_tier_is_rejected(client, world):
    r = client.get(f"{API}/surveys/{world.survey.id}/students",
                   params={"tier": "stellar"}, headers=world.headers(world.teacher))
    assert r.status_code == 422


def test_class_summary(client, world):
    r = client.get(f"{API}/surveys/{world.survey.id}/summary", headers=world.headers(world.teacher))
    assert r.status_code == 200, r.text
    s = r.json()

    assert s["survey_id"] == str(world.survey.id)
    assert s["total_responses"] == 5
    assert s["average_score"] == 4.0
    assert s["participation_rate"] == 166.7
    assert s["respondent_count"] == 3
    assert [p["student_name"] for p in s["top_performers"]] == ["Ana Alvarez"]
    assert [p["student_name"] for p in s["struggling_students"]] == ["Ben Brooks"]
    assert s["tier_counts"] == {"excelling": 1, "good": 0, "struggling": 1, "no_data": 1}
    assert s["enrolled_count"] == 4
    assert s["roster_participation_rate"] == 75.0
    assert [(q["question"], q["average_score"], q["response_count"]) for q in s["question_breakdown"]] == [
        ("How clear was the lesson?", 4.0, 2),
        ("How was the pace?", 4.0, 1),
        ("Anything else?", 0.0, 2),
    ]


def test_summary_of_survey_without_answers(client, world):
    r = client.get(f"{API}/surveys/{world.other_course_survey.id}/summary",
                   headers=world.headers(world.admin))
    assert r.status_code == 200
    s = r.json()
    assert (s["total_responses"], s["average_score"], s["participation_rate"]) == (0, 0.0, 0.0)
    assert s["enrolled_count"] == 0


def test_students_csv_export(client, world, db):
    r = client.get(f"{API}/surveys/{world.survey.id}/exports/students.csv",
                   headers=world.headers(world.teacher))
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/csv")
    assert "attachment" in r.headers["content-disposition"]

    rows = list(csv.reader(io.StringIO(r.text)))
    assert rows[0] == ["student_name", "average_score", "response_count", "last_response_at", "tier"]
    assert rows[1] == ["Ana Alvarez", "4.5", "3", "2024-03-01T09:03:00", "excelling"]
    assert [row[-1] for row in rows[1:]] == ["excelling", "struggling", "no_data"]

    entry = db.query(AuditLog).filter(AuditLog.action == "report.export.students_csv").one()
    assert entry.user_id == world.teacher.id
    assert entry.payload == {"survey_id": str(world.survey.id), "rows": 3}


def test_students_csv_with_ids(client, world):
    r = client.get(f"{API}/surveys/{world.survey.id}/exports/students.csv",
                   params={"include_ids": True}, headers=world.headers(world.teacher))
    rows = list(csv.reader(io.StringIO(r.text)))
    assert rows[0][0] == "student_id"
    assert rows[1][0] == str(world.students[0].id)


def test_summary_xlsx_export(client, world, db):
    r = client.get(f"{API}/surveys/{world.survey.id}/exports/summary.xlsx",
                   headers=world.headers(world.admin))
    assert r.status_code == 200

    wb = load_workbook(io.BytesIO(r.content))
    assert wb.sheetnames == ["Summary", "Students", "Questions"]

    summary = list(wb["Summary"].iter_rows(values_only=True))
    assert summary[1] == ("Week 1 check-in", 5, 4, 166.7, 3, 4, 75)

    students = list(wb["Students"].iter_rows(values_only=True))
    assert len(students) == 4
    assert students[1][1:] == ("Ana Alvarez", 4.5, 3, "2024-03-01T09:03:00", "excelling")

    questions = list(wb["Questions"].iter_rows(values_only=True))
    assert questions[3] == ("Anything else?", "text", 0, 2)

    assert db.query(AuditLog).filter(AuditLog.action == "report.export.summary_xlsx").count() == 1
