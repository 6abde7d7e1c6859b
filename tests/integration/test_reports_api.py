"""Integration tests for report endpoints."""

import pytest


@pytest.fixture
def ledger(client, auth_headers, property_id):
    """Two categories, three expenses across 2023/2024 and two debtors."""

    def post(url, body):
        response = client.post(url, json=body, headers=auth_headers)
        assert response.status_code == 201
        return response.json()

    utilities = post(f"/api/categories/property/{property_id}", {"name": "Utilities"})
    repairs = post(f"/api/categories/property/{property_id}", {"name": "Repairs"})
    expenses_url = f"/api/expenses/property/{property_id}"
    post(expenses_url, {"categoryId": utilities["id"], "amount": 100, "date": "2024-01-15"})
    post(expenses_url, {"categoryId": utilities["id"], "amount": 200, "date": "2024-06-15"})
    post(expenses_url, {"categoryId": repairs["id"], "amount": 50, "date": "2023-12-01"})

    bob = post(f"/api/debtors/property/{property_id}", {"name": "Bob"})
    ann = post(f"/api/debtors/property/{property_id}", {"name": "Ann"})
    post(f"/api/payments/debtor/{bob['id']}", {"amount": "50.00", "date": "2024-02-01"})
    post(f"/api/payments/debtor/{bob['id']}", {"amount": "25.00", "date": "2023-11-01"})
    post(f"/api/payments/debtor/{ann['id']}", {"amount": "10.00", "date": "2023-06-01"})
    return property_id


class TestReportApi:
    def test_unbounded_report(self, client, auth_headers, ledger):
        report = client.get(f"/api/reports/property/{ledger}", headers=auth_headers).json()

        assert report["property"] == {"id": ledger, "name": "Beach House"}
        assert report["period"] == {"startDate": "Beginning", "endDate": "Now"}
        assert report["summary"] == {
            "totalExpenses": 350.0,
            "totalPayments": 85.0,
            "netBalance": 265.0,
            "expenseCount": 3,
        }
        # First seen in date order: the 2023 repair comes first
        assert report["expensesByCategory"] == [
            {"category": "Repairs", "total": 50.0, "count": 1},
            {"category": "Utilities", "total": 300.0, "count": 2},
        ]
        assert [e["date"] for e in report["expenses"]] == ["2023-12-01", "2024-01-15", "2024-06-15"]
        assert "year" not in report
        assert "monthlyBreakdown" not in report

    def test_windowed_report(self, client, auth_headers, ledger):
        report = client.get(
            f"/api/reports/property/{ledger}",
            params={"startDate": "2024-01-01", "endDate": "2024-12-31"},
            headers=auth_headers,
        ).json()

        assert report["period"] == {"startDate": "2024-01-01", "endDate": "2024-12-31"}
        assert report["summary"]["totalExpenses"] == 300.0
        assert report["summary"]["expenseCount"] == 2
        assert report["summary"]["totalPayments"] == 50.0
        assert report["debtorBalances"] == [
            {"debtor": "Ann", "totalPaid": 0.0, "paymentCount": 0},
            {"debtor": "Bob", "totalPaid": 50.0, "paymentCount": 1},
        ]

    def test_debtor_listing_is_not_windowed(self, client, auth_headers, ledger):
        """The debtor listing shows every payment while reports only count the window."""
        debtors = client.get(f"/api/debtors/property/{ledger}", headers=auth_headers).json()
        report = client.get(
            f"/api/reports/property/{ledger}",
            params={"startDate": "2024-01-01"},
            headers=auth_headers,
        ).json()

        bob_listing = next(d for d in debtors if d["name"] == "Bob")
        bob_report = next(d for d in report["debtorBalances"] if d["debtor"] == "Bob")
        assert bob_listing["totalPaid"] == 75.0
        assert len(bob_listing["payments"]) == 2
        assert bob_report["totalPaid"] == 50.0

    def test_start_after_end(self, client, auth_headers, ledger):
        response = client.get(
            f"/api/reports/property/{ledger}",
            params={"startDate": "2024-12-31", "endDate": "2024-01-01"},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "invalid_window"

    def test_unparseable_date(self, client, auth_headers, ledger):
        response = client.get(
            f"/api/reports/property/{ledger}",
            params={"endDate": "31/12/2024"},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "invalid_date"

    def test_empty_property(self, client, auth_headers, property_id):
        report = client.get(f"/api/reports/property/{property_id}", headers=auth_headers).json()

        assert report["summary"] == {
            "totalExpenses": 0.0,
            "totalPayments": 0.0,
            "netBalance": 0.0,
            "expenseCount": 0,
        }
        assert report["expensesByCategory"] == []
        assert report["debtorBalances"] == []
        assert report["expenses"] == []

    def test_foreign_property(self, client, ledger, other_auth_headers):
        response = client.get(f"/api/reports/property/{ledger}", headers=other_auth_headers)
        assert response.status_code == 404

    def test_unknown_property(self, client, auth_headers):
        response = client.get("/api/reports/property/12345", headers=auth_headers)
        assert response.status_code == 404

    @pytest.mark.parametrize("raw_id", ["0", "99999999999999999999"])
    def test_property_id_out_of_range(self, client, auth_headers, raw_id):
        """Ids outside the database key range are rejected before any lookup."""
        response = client.get(f"/api/reports/property/{raw_id}", headers=auth_headers)
        assert response.status_code == 422


class TestYearlyReportApi:
    def test_yearly_report(self, client, auth_headers, ledger):
        report = client.get(
            f"/api/reports/property/{ledger}/year/2024", headers=auth_headers
        ).json()

        assert report["year"] == 2024
        assert report["period"] == {"startDate": "2024-01-01", "endDate": "2024-12-31"}
        assert report["summary"]["totalExpenses"] == 300.0
        months = report["monthlyBreakdown"]
        assert [m["month"] for m in months] == list(range(1, 13))
        assert months[0] == {"month": 1, "total": 100.0, "count": 1}
        assert months[5] == {"month": 6, "total": 200.0, "count": 1}
        assert months[11] == {"month": 12, "total": 0.0, "count": 0}

    def test_invalid_year(self, client, auth_headers, ledger):
        response = client.get(f"/api/reports/property/{ledger}/year/0", headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "invalid_date"

    def test_non_numeric_year(self, client, auth_headers, ledger):
        response = client.get(f"/api/reports/property/{ledger}/year/abcd", headers=auth_headers)
        assert response.status_code == 422


class TestExportApi:
    def test_export_text(self, client, auth_headers, ledger):
        response = client.get(
            f"/api/reports/property/{ledger}/export",
            params={"startDate": "2024-01-01", "endDate": "2024-12-31"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert 'filename="expense-report-Beach-House.txt"' in response.headers["content-disposition"]
        text = response.text
        assert text.startswith("EXPENSE REPORT")
        assert "Period: 2024-01-01 to 2024-12-31" in text
        assert "Number of Expenses: 2" in text
        assert "DETAILED EXPENSES" in text

    def test_export_year(self, client, auth_headers, ledger):
        response = client.get(
            f"/api/reports/property/{ledger}/export", params={"year": 2024}, headers=auth_headers
        )

        assert response.status_code == 200
        assert "MONTHLY BREAKDOWN" in response.text
        assert "expense-report-Beach-House-2024.txt" in response.headers["content-disposition"]

    def test_export_bad_window(self, client, auth_headers, ledger):
        response = client.get(
            f"/api/reports/property/{ledger}/export",
            params={"startDate": "2024-12-31", "endDate": "2024-01-01"},
            headers=auth_headers,
        )
        assert response.status_code == 400
