import pytest

from marketplace.models import Product

from .conftest import make_product

pytestmark = pytest.mark.django_db


def test_anyone_can_browse(api_client, product):
    res = api_client.get("/api/v1/products/")
    assert res.status_code == 200
    assert [p["id"] for p in res.data["results"]] == [product.id]


def test_filters_and_search(api_client, seller):
    lamp = make_product(seller, title="Desk lamp", price=1500, category="Furniture")
    make_product(seller, title="Calculus textbook", price=3000, category="Books")
    make_product(seller, title="Bike lock", price=800, category="Sports", condition="new")

    ids = lambda res: [p["id"] for p in res.data["results"]]  # noqa: E731

    assert ids(api_client.get("/api/v1/products/", {"category": "Furniture"})) == [lamp.id]
    assert len(ids(api_client.get("/api/v1/products/", {"min_price": 1000}))) == 2
    assert len(ids(api_client.get("/api/v1/products/", {"max_price": 1000}))) == 1
    assert len(ids(api_client.get("/api/v1/products/", {"condition": "new"}))) == 1
    assert ids(api_client.get("/api/v1/products/", {"search": "lamp"})) == [lamp.id]


def test_newest_first(api_client, seller):
    older = make_product(seller, title="older")
    newer = make_product(seller, title="newer")
    res = api_client.get("/api/v1/products/")
    assert [p["id"] for p in res.data["results"]] == [newer.id, older.id]


def test_create_listing_sets_seller_and_keeps_image_order(api_client, seller):
    api_client.force_authenticate(seller)
    payload = {
        "title": "Mini fridge",
        "description": "Fits under a dorm desk",
        "price": 4500,
        "condition": "good",
        "category": "Appliances",
        "location": "West dorms",
        "images": ["https://cdn.example/2.jpg", "https://cdn.example/1.jpg"],
        "allow_delivery": True,
    }
    res = api_client.post("/api/v1/products/", payload, format="json")

    assert res.status_code == 201
    assert res.data["seller"] == seller.id
    assert res.data["is_sold"] is False
    assert res.data["images"] == ["https://cdn.example/2.jpg", "https://cdn.example/1.jpg"]
    assert Product.objects.get().allow_campus_meetup is True


def test_listing_needs_a_delivery_method(api_client, seller):
    api_client.force_authenticate(seller)
    payload = {
        "title": "Chair", "description": "Wooden", "price": 1000, "condition": "fair",
        "category": "Furniture", "location": "Library",
        "allow_campus_meetup": False, "allow_delivery": False, "allow_pickup": False,
    }
    assert api_client.post("/api/v1/products/", payload, format="json").status_code == 400


def test_is_sold_cannot_be_set_by_client(api_client, seller):
    api_client.force_authenticate(seller)
    payload = {
        "title": "Chair", "description": "Wooden", "price": 1000, "condition": "fair",
        "category": "Furniture", "location": "Library", "is_sold": True,
    }
    res = api_client.post("/api/v1/products/", payload, format="json")
    assert res.status_code == 201
    assert res.data["is_sold"] is False


def test_my_listings(api_client, seller, buyer, product):
    make_product(buyer, title="Not mine")
    api_client.force_authenticate(seller)
    res = api_client.get("/api/v1/products/mine/")
    assert [p["id"] for p in res.data["results"]] == [product.id]

    api_client.force_authenticate(None)
    assert api_client.get("/api/v1/products/mine/").status_code == 401
