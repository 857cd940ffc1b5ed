"""
TutorHub Backend — Instructor Directory Endpoint Tests
=======================================================

What we test:
    ✅ Public directory with nested course summaries
    ✅ Detail view: instructor-only, courses with category, schedules with student
    ✅ No projection ever leaks the password hash
"""

from datetime import datetime

import pytest
from sqlalchemy import select

from tests.conftest import register, register_and_login
from tutorhub.models import Course, Schedule, Student

PUBLIC_FIELDS = {
    "id", "role", "fullName", "bio", "profilePicture",
    "location", "phoneNumber", "email", "geometry",
}


async def create_course(client, token, category_id, name="Algebra I"):
    response = await client.post(
        "/course",
        json={"name": name, "price": 100, "CategoryId": category_id, "level": "beginner"},
        headers={"access_token": token},
    )
    assert response.status_code == 201
    return response.json()


class TestInstructorDirectory:

    @pytest.mark.asyncio
    async def test_empty_directory(self, test_client):
        response = await test_client.get("/instructor")
        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_directory_is_public_and_lists_courses(self, test_client, categories):
        token = await register_and_login(test_client, "instructor")
        await register(test_client, "instructor", email="budi@mail.com", fullName="Budi")
        await create_course(test_client, token, categories["Mathematics"])

        response = await test_client.get("/instructor")

        assert response.status_code == 200
        instructors = response.json()
        assert [i["fullName"] for i in instructors] == ["Alice Anderson", "Budi"]
        first = instructors[0]
        assert set(first) == PUBLIC_FIELDS | {"Courses"}
        assert first["role"] == "instructor"
        assert first["geometry"] == {"type": "Point", "coordinates": [106.8456, -6.2088]}
        assert first["Courses"] == [
            {
                "name": "Algebra I",
                "detail": None,
                "price": 100,
                "imgUrl": None,
                "type": None,
                "CategoryId": categories["Mathematics"],
                "level": "beginner",
            }
        ]
        assert instructors[1]["Courses"] == []

    @pytest.mark.asyncio
    async def test_directory_never_exposes_password(self, test_client):
        await register(test_client, "instructor")
        response = await test_client.get("/instructor")
        assert "password" not in response.json()[0]
        assert "$2b$" not in response.text


class TestInstructorDetail:

    @pytest.mark.asyncio
    async def test_detail_with_courses_and_schedules(
        self, test_client, categories, db_session_factory
    ):
        token = await register_and_login(test_client, "instructor")
        await register(test_client, "student", email="sari@mail.com", fullName="Sari", location="Bandung")
        await create_course(test_client, token, categories["Music"], name="Piano Basics")

        async with db_session_factory() as session:
            student = await session.scalar(select(Student))
            session.add(Schedule(time=datetime(2024, 5, 1, 9, 30), instructor_id=1, student_id=student.id))
            await session.commit()

        response = await test_client.get("/instructor/1", headers={"access_token": token})

        assert response.status_code == 200
        body = response.json()
        assert set(body) == PUBLIC_FIELDS | {"Courses", "Schedules"}
        assert body["Courses"][0]["name"] == "Piano Basics"
        assert body["Courses"][0]["Category"] == {"name": "Music"}
        assert len(body["Schedules"]) == 1
        schedule = body["Schedules"][0]
        assert schedule["time"].startswith("2024-05-01T09:30")
        assert schedule["Student"] == {"fullName": "Sari", "location": "Bandung"}

    @pytest.mark.asyncio
    async def test_any_instructor_may_view_another(self, test_client):
        await register(test_client, "instructor")
        token = await register_and_login(test_client, "instructor", email="budi@mail.com")

        response = await test_client.get("/instructor/1", headers={"access_token": token})

        assert response.status_code == 200
        assert response.json()["email"] == "alice@mail.com"

    @pytest.mark.asyncio
    async def test_unknown_instructor_is_404(self, test_client):
        token = await register_and_login(test_client, "instructor")
        response = await test_client.get("/instructor/99", headers={"access_token": token})
        assert response.status_code == 404
        assert response.json() == {"error": "not_found", "message": "Instructor not found"}

    @pytest.mark.asyncio
    async def test_detail_requires_instructor_token(self, test_client):
        await register(test_client, "instructor")
        response = await test_client.get("/instructor/1")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_courses_ordered_by_id(self, test_client, categories, db_session_factory):
        token = await register_and_login(test_client, "instructor")
        for name in ("B course", "A course", "C course"):
            await create_course(test_client, token, categories["Music"], name=name)

        response = await test_client.get("/instructor/1", headers={"access_token": token})

        assert [c["name"] for c in response.json()["Courses"]] == ["B course", "A course", "C course"]
        async with db_session_factory() as session:
            ids = (await session.scalars(select(Course.id).order_by(Course.id))).all()
        assert ids == [1, 2, 3]
