"""Route tests for POST /api/v1/payment/create."""

import pytest

pytestmark = pytest.mark.integration

SHIPPING_INFO = {
    "address": "1 Main St",
    "city": "Pune",
    "state": "MH",
    "country": "IN",
    "pinCode": 411001,
}


@pytest.fixture
async def shopper(make_user):
    return await make_user("Asha")


def body(items, coupon=None, shipping_info=SHIPPING_INFO):
    payload = {"items": items}
    if shipping_info is not None:
        payload["shippingInfo"] = shipping_info
    if coupon is not None:
        payload["coupon"] = coupon
    return payload


class TestCreatePayment:
    """Tests for payment intent creation."""

    async def test_success(self, client, fake_gateway, shopper, make_product):
        """Catalog prices are charged, not the client's."""
        laptop = await make_product("Laptop", price=600)
        items = [{"productId": laptop.id, "quantity": 2, "price": 1}]

        response = await client.post(
            "/api/v1/payment/create", params={"id": shopper.id}, json=body(items)
        )

        assert response.status_code == 201
        assert response.json() == {"success": True, "clientSecret": "pi_test_secret_123"}
        [call] = fake_gateway.calls
        assert call["amount"] == 141600
        assert call["currency"] == "inr"
        assert call["metadata"] == {"userId": shopper.id}
        assert call["shipping"]["name"] == "Asha"
        assert call["shipping"]["address"]["postal_code"] == "411001"

    async def test_coupon_discount(self, client, fake_gateway, shopper, make_product, make_coupon):
        """A coupon's amount comes off the total."""
        book = await make_product("Book", price=300, category="books")
        await make_coupon("SAVE100", 100)
        items = [{"productId": book.id, "quantity": 1}]

        response = await client.post(
            "/api/v1/payment/create",
            params={"id": shopper.id},
            json=body(items, coupon="SAVE100"),
        )

        assert response.status_code == 201
        # 300 + 54 + 200 - 100
        assert fake_gateway.calls[0]["amount"] == 45400

    @pytest.mark.parametrize(
        ("params", "message"),
        [
            ({}, "Please login first"),
            ({"id": "ghost"}, "Invalid user ID or not logged in"),
        ],
    )
    async def test_unauthorized(self, client, fake_gateway, params, message):
        """The payer must be a known user."""
        response = await client.post(
            "/api/v1/payment/create",
            params=params,
            json=body([{"productId": "p1", "quantity": 1}]),
        )

        assert response.status_code == 401
        assert response.json()["message"] == message
        assert fake_gateway.calls == []

    async def test_empty_cart(self, client, shopper):
        """An empty cart is rejected."""
        response = await client.post(
            "/api/v1/payment/create", params={"id": shopper.id}, json=body([])
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Please add items to cart"

    async def test_missing_shipping(self, client, shopper):
        """Shipping info is required."""
        response = await client.post(
            "/api/v1/payment/create",
            params={"id": shopper.id},
            json=body([{"productId": "p1", "quantity": 1}], shipping_info=None),
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Please provide shipping info"

    async def test_invalid_coupon(self, client, fake_gateway, shopper, make_product):
        """An unknown coupon stops the payment."""
        laptop = await make_product()

        response = await client.post(
            "/api/v1/payment/create",
            params={"id": shopper.id},
            json=body([{"productId": laptop.id, "quantity": 1}], coupon="NOPE"),
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid Coupon Code"
        assert fake_gateway.calls == []
