"""Route tests for the dashboard endpoints (JSON shape and keys)."""

import pytest

pytestmark = pytest.mark.integration


@pytest.fixture
async def current_records(make_product, make_user, make_order):
    """One product, user and order created now."""
    product = await make_product("Phone", category="electronics", stock=0)
    user = await make_user("Asha", role="admin")
    order = await make_order(total=1180, discount=20, user=user, items=3)
    return product, user, order


class TestStatsEndpoint:
    """Tests for GET /api/v1/dashboard/stats."""

    async def test_stats_payload(self, client, current_records):
        """Keys are camelCase and latest transactions expose ``_id``."""
        _, _, order = current_records

        response = await client.get("/api/v1/dashboard/stats")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        stats = body["stats"]
        assert set(stats) == {
            "categoryCount",
            "changePercent",
            "count",
            "chart",
            "userRatio",
            "latestTransaction",
        }
        assert stats["categoryCount"] == {"electronics": 100}
        assert stats["changePercent"] == {
            "revenue": 118000,
            "product": 100,
            "user": 100,
            "order": 100,
        }
        assert stats["count"] == {"revenue": 1180, "product": 1, "user": 1, "order": 1}
        assert len(stats["chart"]["order"]) == 6
        assert stats["chart"]["order"][-1] == 1
        assert stats["chart"]["revenue"][-1] == 1180
        assert stats["userRatio"] == {"male": 0, "female": 1}
        assert stats["latestTransaction"] == [
            {
                "_id": order.id,
                "discount": 20,
                "amount": 1180,
                "quantity": 3,
                "status": "Processing",
            }
        ]


class TestChartEndpoints:
    """Tests for the pie, bar and line endpoints."""

    async def test_pie_payload(self, client, current_records):
        """Pie keys keep the storefront spelling."""
        response = await client.get("/api/v1/dashboard/pie")

        assert response.status_code == 200
        charts = response.json()["charts"]
        assert set(charts) == {
            "orderFullfillment",
            "productCategories",
            "stockAvailability",
            "revenueDistribution",
            "usersAgeGroup",
            "adminCustomer",
        }
        assert charts["orderFullfillment"] == {"processing": 1, "shipped": 0, "delivered": 0}
        assert charts["stockAvailability"] == {"inStock": 0, "outOfStock": 1}
        assert set(charts["revenueDistribution"]) == {
            "netMargin",
            "discount",
            "productionCost",
            "burnt",
            "marketingCost",
        }
        assert charts["adminCustomer"] == {"admin": 1, "customer": 0}

    async def test_bar_payload(self, client, current_records):
        """Bar series have 6, 6 and 12 buckets."""
        response = await client.get("/api/v1/dashboard/bar")

        assert response.status_code == 200
        charts = response.json()["charts"]
        assert len(charts["users"]) == 6
        assert len(charts["products"]) == 6
        assert len(charts["orders"]) == 12
        assert charts["orders"][-1] == 1

    async def test_line_payload(self, client, current_records):
        """Line series all have 12 buckets ending this month."""
        response = await client.get("/api/v1/dashboard/line")

        assert response.status_code == 200
        charts = response.json()["charts"]
        assert {key: len(series) for key, series in charts.items()} == {
            "users": 12,
            "products": 12,
            "discount": 12,
            "revenue": 12,
        }
        assert charts["discount"][-1] == 20
        assert charts["revenue"][-1] == 1180

    async def test_empty_store(self, client):
        """Every endpoint answers on an empty store."""
        for path in ("stats", "pie", "bar", "line"):
            response = await client.get(f"/api/v1/dashboard/{path}")
            assert response.status_code == 200, path
            assert response.json()["success"] is True
