from httpx import AsyncClient

API = "/api/v1"


def registration_body(email: str = "maria@example.com", password: str = "Secret123") -> dict:
    return {"firstName": "Maria", "lastName": "Silva", "email": email, "password": password}


class TestRegistration:
    async def test_register_returns_camel_case_user(self, api_client: AsyncClient, scenario):
        response = await api_client.post(f"{API}/users", json=registration_body())

        assert response.status_code == 201
        body = response.json()
        assert body["firstName"] == "Maria"
        assert body["roles"] == ["SEM_FUNCAO"]
        assert "password" not in body and "passwordHash" not in body
        family = await scenario.family_of(body["id"])
        assert family.holder_id == body["id"]

    async def test_duplicate_email_is_conflict(self, api_client: AsyncClient):
        await api_client.post(f"{API}/users", json=registration_body())

        response = await api_client.post(f"{API}/users", json=registration_body(email="MARIA@example.com"))

        assert response.status_code == 409
        assert response.headers["X-Error-Code"] == "CONFLICT_ERROR"

    async def test_short_password_is_rejected(self, api_client: AsyncClient):
        response = await api_client.post(f"{API}/users", json=registration_body(password="short"))

        assert response.status_code == 422


class TestDependantsApi:
    body = {
        "firstName": "Pedro",
        "lastName": "Silva",
        "birthdate": "2012-05-20",
        "relationship": "SON",
        "sex": "MALE",
    }

    async def test_affiliated_family_adds_dependant(self, api_client: AsyncClient, scenario):
        user = await scenario.register_user()
        family = await scenario.affiliate(user.id)

        response = await api_client.post(
            f"{API}/dependants", json=self.body, headers=await scenario.auth_headers(user.id)
        )

        assert response.status_code == 201
        body = response.json()
        assert body["familyId"] == family.id
        assert body["type"] == "STUDENT"

    async def test_unaffiliated_family_is_refused(self, api_client: AsyncClient, scenario):
        user = await scenario.register_user()

        response = await api_client.post(
            f"{API}/dependants", json=self.body, headers=await scenario.auth_headers(user.id)
        )

        assert response.status_code == 400
        assert response.headers["X-Error-Code"] == "INVALID_OPERATION"


class TestRoleManagement:
    async def test_admin_replaces_roles(self, api_client: AsyncClient, scenario):
        user = await scenario.register_user()

        response = await api_client.put(
            f"{API}/admin/users/{user.id}/roles", json={"roles": ["ADMIN"]}, headers=scenario.admin_headers()
        )

        assert response.status_code == 200
        assert set(response.json()["roles"]) == {"ADMIN", "SEM_FUNCAO"}

    async def test_empty_role_list_is_invalid(self, api_client: AsyncClient, scenario):
        user = await scenario.register_user()

        response = await api_client.put(
            f"{API}/admin/users/{user.id}/roles", json={"roles": []}, headers=scenario.admin_headers()
        )

        assert response.status_code == 422
