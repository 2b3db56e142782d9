from seed import seed_data


def test_seed_populates_empty_store(store):
    assert seed_data(store) is True

    assert [c["course_code"] for c in store.courses.find_many()] == ["AWD101", "DSF201", "ML301"]
    alex = store.students.find_one({"student_id": "STU2024001"})
    assert len(alex["enrolled_courses"]) == 2
    assert len(store.test_marks.find_many({"student_id": alex["id"]})) == 2

    submissions = store.submissions.find_many({"student_id": alex["id"]})
    assert [s["status"] for s in submissions] == ["graded", "submitted"]

    dsf = store.courses.find_one({"course_code": "DSF201"})
    assert len(dsf["students_enrolled"]) == 2


def test_seed_skips_populated_store(store):
    seed_data(store)
    assert seed_data(store) is False
    assert len(store.students.find_many()) == 2


def test_seeded_report(client, store):
    seed_data(store)

    data = client.get("/api/student/STU2024001").json()["data"]

    # assignments 92, tests (85 + 72) / 2 = 78.5
    assert data["student"]["overallGrade"] == 85
    assert data["analytics"]["gradeDistribution"] == [1, 1, 1, 0, 0]
