"""HTTP behaviour: authentication, role checks, error bodies and scoped listings."""
from school_api.schemas.enrollment_schemas import EnrollmentRegister
from school_api.services.enrollment_service import EnrollmentService


# =============================================================================
# Authentication
# =============================================================================

async def test_login_with_username_and_email(client, admin_user):
    by_username = await client.post("/api/v1/auth/login", json={"username": "admin", "password": "admin-pass"})
    by_email = await client.post(
        "/api/v1/auth/login", json={"username": "admin@school.edu", "password": "admin-pass"}
    )

    assert by_username.status_code == 200
    assert by_email.status_code == 200
    body = by_username.json()
    assert body["token_type"] == "bearer"
    assert body["access_token"] and body["refresh_token"]


async def test_login_with_wrong_password(client, admin_user):
    response = await client.post("/api/v1/auth/login", json={"username": "admin", "password": "nope"})

    assert response.status_code == 401
    assert response.json()["code"] == "invalid_credentials"


async def test_refresh_and_profile(client, admin_user):
    tokens = (await client.post(
        "/api/v1/auth/login", json={"username": "admin", "password": "admin-pass"}
    )).json()

    refreshed = await client.post("/api/v1/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert refreshed.status_code == 200

    profile = await client.get(
        "/api/v1/auth/profile", headers={"Authorization": f"Bearer {refreshed.json()['access_token']}"}
    )
    assert profile.status_code == 200
    assert profile.json()["username"] == "admin"
    assert profile.json()["role"] == "ADMIN"


async def test_refresh_token_is_not_an_access_token(client, admin_user):
    tokens = (await client.post(
        "/api/v1/auth/login", json={"username": "admin", "password": "admin-pass"}
    )).json()

    response = await client.get(
        "/api/v1/auth/profile", headers={"Authorization": f"Bearer {tokens['refresh_token']}"}
    )
    assert response.status_code == 401


async def test_register_refuses_admin_role(client):
    response = await client.post(
        "/api/v1/auth/register",
        json={"username": "mallory", "password": "secret1", "role": "ADMIN"},
    )
    assert response.status_code == 403


async def test_register_creates_account(client):
    response = await client.post(
        "/api/v1/auth/register",
        json={"username": "grace", "email": "grace@school.edu", "password": "secret1", "role": "TEACHER"},
    )
    assert response.status_code == 201
    assert response.json()["role"] == "TEACHER"
    assert "password_hash" not in response.json()


# =============================================================================
# Authorization
# =============================================================================

async def test_missing_token_is_unauthorized(client):
    response = await client.get("/api/v1/departments/")

    assert response.status_code == 401
    assert response.json()["code"] == "unauthorized"


async def test_student_cannot_create_department(client, student_headers):
    response = await client.post(
        "/api/v1/departments/", json={"name": "Art", "code": "AR"}, headers=student_headers
    )
    assert response.status_code == 403
    assert response.json()["code"] == "forbidden"


async def test_admin_creates_department(client, admin_headers):
    response = await client.post(
        "/api/v1/departments/", json={"name": "Art", "code": "AR"}, headers=admin_headers
    )
    assert response.status_code == 201
    assert response.json()["code"] == "AR"

    duplicate = await client.post(
        "/api/v1/departments/", json={"name": "Art", "code": "AR2"}, headers=admin_headers
    )
    assert duplicate.status_code == 400
    assert duplicate.json()["code"] == "department_already_exists"


async def test_users_are_admin_only(client, student_headers, admin_headers):
    assert (await client.get("/api/v1/users/", headers=student_headers)).status_code == 403
    assert (await client.get("/api/v1/users/", headers=admin_headers)).status_code == 200


# =============================================================================
# Error bodies
# =============================================================================

async def test_page_size_over_limit_rejected(client, admin_headers):
    response = await client.get("/api/v1/departments/?page_size=51", headers=admin_headers)

    assert response.status_code == 422
    body = response.json()
    assert body["code"] == "validation_error"
    assert {"statusCode", "code", "message", "path", "timestamp"} <= set(body)
    assert body["path"] == "/api/v1/departments/"


async def test_not_found_body(client, admin_headers):
    response = await client.get(
        "/api/v1/rooms/00000000-0000-0000-0000-000000000000", headers=admin_headers
    )

    assert response.status_code == 404
    assert response.json()["statusCode"] == 404
    assert response.json()["code"] == "room_not_found"


async def test_paginated_listing_shape(client, admin_headers, department):
    response = await client.get("/api/v1/departments/?page=1&page_size=5", headers=admin_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 1
    assert body["total_pages"] == 1
    assert body["results"][0]["name"] == "Mathematics"


# =============================================================================
# Enrollments
# =============================================================================

async def test_student_registers_and_sees_only_own(
    client, db, student_headers, other_student, class_room
):
    response = await client.post(
        "/api/v1/enrollments/", json={"class_id": str(class_room.id)}, headers=student_headers
    )
    assert response.status_code == 201
    assert response.json()["status"] == "ACTIVE"
    assert response.json()["status_history"][0]["reason"] == "Initial enrollment"

    await EnrollmentService(db).register(other_student.id, EnrollmentRegister(class_id=class_room.id))

    listing = await client.get("/api/v1/enrollments/", headers=student_headers)
    assert listing.status_code == 200
    assert listing.json()["count"] == 1
    assert listing.json()["results"][0]["id"] == response.json()["id"]


async def test_student_sees_summary_of_other_enrollment(client, db, student_headers, other_student, class_room):
    other = await EnrollmentService(db).register(other_student.id, EnrollmentRegister(class_id=class_room.id))

    response = await client.get(f"/api/v1/enrollments/{other.id}", headers=student_headers)

    assert response.status_code == 200
    assert set(response.json()) == {"id", "status", "class_id", "enrollment_date"}


async def test_admin_must_name_student(client, admin_headers, class_room):
    response = await client.post(
        "/api/v1/enrollments/", json={"class_id": str(class_room.id)}, headers=admin_headers
    )
    assert response.status_code == 400
    assert response.json()["code"] == "enrollment_bad_request"


async def test_duplicate_registration_over_http(client, student_headers, class_room):
    payload = {"class_id": str(class_room.id)}
    await client.post("/api/v1/enrollments/", json=payload, headers=student_headers)

    response = await client.post("/api/v1/enrollments/", json=payload, headers=student_headers)

    assert response.status_code == 400
    assert response.json()["message"] == "Student is already enrolled in this class"


async def test_student_drops_own_enrollment(client, student_headers, class_room):
    created = await client.post(
        "/api/v1/enrollments/", json={"class_id": str(class_room.id)}, headers=student_headers
    )

    response = await client.post(
        f"/api/v1/enrollments/{created.json()['id']}/drop", json={"reason": "Too early"}, headers=student_headers
    )

    assert response.status_code == 200
    assert response.json()["status"] == "DROPPED"
    assert response.json()["status_history"][-1]["reason"] == "Too early"


# =============================================================================
# Health
# =============================================================================

async def test_health(client):
    response = await client.get("/health/")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
