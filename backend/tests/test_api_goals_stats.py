import pytest


def log_workout(client, date, calories=100, duration=20, user="alice"):
    r = client.post(
        "/workouts",
        json={
            "exerciseType": "Cycling",
            "duration": duration,
            "calories": calories,
            "intensity": "medium",
            "date": date,
        },
        headers={"X-User-Id": user},
    )
    assert r.status_code == 200, r.text
    return r.json()


class TestGoals:
    def test_create_forces_current_to_zero(self, client):
        r = client.post("/goals", json={"type": "daily_calories", "target": 600, "current": 250})
        assert r.status_code == 200, r.text
        goal = r.json()
        assert goal["current"] == 0
        assert goal["target"] == 600
        assert goal["userId"] == "alice"
        assert set(goal) == {"id", "userId", "type", "target", "current", "date"}

    def test_list_only_own_goals(self, client):
        client.post("/goals", json={"type": "active_time", "target": 90})
        client.post("/goals", json={"type": "active_time", "target": 30}, headers={"X-User-Id": "bob"})
        goals = client.get("/goals").json()
        assert [g["target"] for g in goals] == [90]

    @pytest.mark.parametrize(
        "body",
        [
            {"type": "", "target": 5},
            {"type": "   ", "target": 5},
            {"type": "daily_calories", "target": 0},
        ],
    )
    def test_create_invalid(self, client, body):
        assert client.post("/goals", json=body).status_code == 422
        assert client.get("/goals").json() == []

    def test_create_strips_type(self, client):
        r = client.post("/goals", json={"type": "  active_time ", "target": 90})
        assert r.status_code == 200, r.text
        assert r.json()["type"] == "active_time"

    def test_patch_updates_current_only(self, client):
        goal = client.post("/goals", json={"type": "daily_workouts", "target": 3}).json()
        r = client.patch(f"/goals/{goal['id']}", json={"current": 2, "target": 99, "type": "x"})
        assert r.status_code == 200, r.text
        updated = r.json()
        assert updated["current"] == 2
        assert updated["target"] == 3
        assert updated["type"] == "daily_workouts"

    def test_patch_missing(self, client):
        r = client.patch("/goals/nope", json={"current": 1})
        assert r.status_code == 404
        assert r.json()["detail"] == "Goal not found"

    def test_patch_negative(self, client):
        goal = client.post("/goals", json={"type": "daily_workouts", "target": 3}).json()
        assert client.patch(f"/goals/{goal['id']}", json={"current": -1}).status_code == 422


class TestExercises:
    def test_seeded_catalog(self, client):
        r = client.get("/exercises")
        assert r.status_code == 200
        catalog = r.json()
        assert len(catalog) == 8
        running = next(e for e in catalog if e["name"] == "Running")
        assert running["caloriesPerMinute"] == 8
        assert running["category"] == "cardio"

    def test_create(self, client):
        r = client.post("/exercises", json={"name": "Rowing", "category": "cardio", "caloriesPerMinute": 9})
        assert r.status_code == 200, r.text
        assert r.json()["emoji"] == ""
        assert any(e["name"] == "Rowing" for e in client.get("/exercises").json())

    def test_create_invalid(self, client):
        r = client.post("/exercises", json={"name": "Rowing", "category": "cardio", "caloriesPerMinute": -1})
        assert r.status_code == 422


class TestStats:
    def test_today_empty(self, client):
        assert client.get("/stats/today").json() == {"workouts": 0, "calories": 0, "duration": 0}

    def test_today(self, client):
        log_workout(client, "2025-01-08T06:00:00Z", calories=200, duration=30)
        log_workout(client, "2025-01-08T23:59:00Z", calories=50, duration=10)
        log_workout(client, "2025-01-07T12:00:00Z", calories=999, duration=99)
        log_workout(client, "2025-01-08T12:00:00Z", calories=999, duration=99, user="bob")

        assert client.get("/stats/today").json() == {"workouts": 2, "calories": 250, "duration": 40}

    def test_weekly_series(self, client):
        log_workout(client, "2025-01-06T07:00:00Z", calories=100, duration=20)
        log_workout(client, "2025-01-06T19:00:00Z", calories=50, duration=10)
        log_workout(client, "2025-01-05T07:00:00Z", calories=500, duration=60)  # last week

        r = client.get("/stats/weekly")
        assert r.status_code == 200
        body = r.json()
        assert body["weekStart"] == "2025-01-06"
        assert len(body["days"]) == 7
        mon = body["days"][0]
        assert mon["day"] == "Mon"
        assert (mon["calories"], mon["duration"], mon["workouts"]) == (150, 30, 2)
        assert mon["activityScore"] == pytest.approx(96)
        assert body["maxActivityScore"] == pytest.approx(96)
        assert body["totals"] == {"workouts": 2, "calories": 150, "duration": 30, "activeDays": 1}

    def test_goal_progress_defaults(self, client):
        log_workout(client, "2025-01-08T09:00:00Z", calories=300, duration=45)

        body = client.get("/stats/goals").json()
        assert body["calories"] == {"current": 300, "target": 600, "percentage": 50}
        assert body["workouts"] == {"current": 1, "target": 3, "percentage": 33}
        assert body["activeTime"] == {"current": 45, "target": 90, "percentage": 50}
        assert body["overall"] == 44
        assert (body["achieved"], body["total"]) == (0, 3)

    def test_goal_progress_uses_user_goals(self, client):
        client.post("/goals", json={"type": "daily_calories", "target": 300})
        client.post("/goals", json={"type": "daily_workouts", "target": 1})
        log_workout(client, "2025-01-08T09:00:00Z", calories=300, duration=45)

        body = client.get("/stats/goals").json()
        assert body["calories"]["percentage"] == 100
        assert body["workouts"]["percentage"] == 100
        assert body["activeTime"]["target"] == 90
        assert body["achieved"] == 2
        assert body["overall"] == 83

    def test_streak(self, client):
        for day in ("06", "07", "08"):
            log_workout(client, f"2025-01-{day}T08:00:00Z")
        log_workout(client, "2025-01-03T08:00:00Z")

        assert client.get("/stats/streak").json() == {"days": 3, "lastActive": "2025-01-08"}

    def test_streak_empty(self, client):
        assert client.get("/stats/streak").json() == {"days": 0, "lastActive": None}
