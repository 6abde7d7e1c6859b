"""Integration tests for category endpoints."""


class TestCategoriesApi:
    def _create(self, client, headers, property_id, name):
        return client.post(
            f"/api/categories/property/{property_id}", json={"name": name}, headers=headers
        )

    def test_create_and_list_by_name(self, client, auth_headers, property_id):
        for name in ("Water", "Electricity", "Repairs"):
            assert self._create(client, auth_headers, property_id, name).status_code == 201

        listing = client.get(f"/api/categories/property/{property_id}", headers=auth_headers).json()

        assert [c["name"] for c in listing] == ["Electricity", "Repairs", "Water"]
        assert all(c["expenseCount"] == 0 for c in listing)
        assert listing[0]["propertyId"] == property_id

    def test_expense_count(self, client, auth_headers, property_id):
        category = self._create(client, auth_headers, property_id, "Water").json()
        for day in ("2024-01-01", "2024-02-01"):
            client.post(
                f"/api/expenses/property/{property_id}",
                json={"categoryId": category["id"], "amount": "12.50", "date": day},
                headers=auth_headers,
            )

        listing = client.get(f"/api/categories/property/{property_id}", headers=auth_headers).json()

        assert listing[0]["expenseCount"] == 2

    def test_duplicate_name(self, client, auth_headers, property_id):
        self._create(client, auth_headers, property_id, "Water")

        response = self._create(client, auth_headers, property_id, "Water")

        assert response.status_code == 400
        assert response.json()["error"] == {
            "code": "duplicate_name",
            "message": "Category already exists",
        }

    def test_same_name_on_another_property(self, client, auth_headers, property_id):
        other = client.post("/api/properties", json={"name": "Flat"}, headers=auth_headers).json()
        self._create(client, auth_headers, property_id, "Water")

        assert self._create(client, auth_headers, other["id"], "Water").status_code == 201

    def test_rename(self, client, auth_headers, property_id):
        category = self._create(client, auth_headers, property_id, "Watr").json()

        response = client.put(
            f"/api/categories/property/{property_id}/{category['id']}",
            json={"name": "Water"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["name"] == "Water"

    def test_rename_to_existing_name(self, client, auth_headers, property_id):
        self._create(client, auth_headers, property_id, "Water")
        power = self._create(client, auth_headers, property_id, "Power").json()

        response = client.put(
            f"/api/categories/property/{property_id}/{power['id']}",
            json={"name": "Water"},
            headers=auth_headers,
        )

        assert response.status_code == 400

    def test_rename_to_same_name(self, client, auth_headers, property_id):
        water = self._create(client, auth_headers, property_id, "Water").json()

        response = client.put(
            f"/api/categories/property/{property_id}/{water['id']}",
            json={"name": "Water"},
            headers=auth_headers,
        )

        assert response.status_code == 200

    def test_delete_removes_expenses(self, client, auth_headers, property_id):
        category = self._create(client, auth_headers, property_id, "Water").json()
        client.post(
            f"/api/expenses/property/{property_id}",
            json={"categoryId": category["id"], "amount": 5, "date": "2024-01-01"},
            headers=auth_headers,
        )

        response = client.delete(
            f"/api/categories/property/{property_id}/{category['id']}", headers=auth_headers
        )

        assert response.status_code == 200
        expenses = client.get(f"/api/expenses/property/{property_id}", headers=auth_headers)
        assert expenses.json() == []

    def test_category_of_other_property_not_found(self, client, auth_headers, property_id):
        other = client.post("/api/properties", json={"name": "Flat"}, headers=auth_headers).json()
        category = self._create(client, auth_headers, other["id"], "Water").json()

        response = client.delete(
            f"/api/categories/property/{property_id}/{category['id']}", headers=auth_headers
        )

        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Category not found"

    def test_foreign_property(self, client, property_id, other_auth_headers):
        response = client.get(f"/api/categories/property/{property_id}", headers=other_auth_headers)
        assert response.status_code == 404

        response = self._create(client, other_auth_headers, property_id, "Sneaky")
        assert response.status_code == 404
