import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from chat.consumers import ChatConsumer
from chat.models import Chat
from chat.registry import ConnectionRegistry
from marketplace.models import Product

User = get_user_model()


def make_product(seller, **overrides):
    fields = {
        "title": "Desk lamp",
        "description": "Works fine, bulb included",
        "price": 1500,
        "condition": Product.Condition.GOOD,
        "category": "Furniture",
        "location": "North campus",
        "allow_campus_meetup": True,
        "allow_delivery": True,
        "allow_pickup": False,
    }
    fields.update(overrides)
    return Product.objects.create(seller=seller, **fields)


@pytest.fixture
def seller():
    return User.objects.create_user(username="seller", password="pass-1234-word")


@pytest.fixture
def buyer():
    return User.objects.create_user(username="buyer", password="pass-1234-word")


@pytest.fixture
def stranger():
    return User.objects.create_user(username="stranger", password="pass-1234-word")


@pytest.fixture
def product(seller):
    return make_product(seller)


@pytest.fixture
def chat(product, buyer, seller):
    return Chat.objects.create(product=product, buyer=buyer, seller=seller)


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def registry():
    return ConnectionRegistry()


def with_user(app, user):
    """AuthMiddlewareStack の代わりに scope["user"] を埋める"""
    async def inner(scope, receive, send):
        return await app(dict(scope, user=user), receive, send)
    return inner


@pytest.fixture
def consumer_app(registry):
    """registry を差し替えた consumer の ASGI アプリを作る"""
    consumer_class = type("TestChatConsumer", (ChatConsumer,), {"registry": registry})

    def build(user=None):
        app = consumer_class.as_asgi()
        return with_user(app, user) if user is not None else app
    return build
