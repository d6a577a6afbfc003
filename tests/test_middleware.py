import pytest
from channels.testing import WebsocketCommunicator
from rest_framework_simplejwt.tokens import AccessToken

from chat.middleware import JWTAuthMiddleware

pytestmark = [pytest.mark.django_db(transaction=True), pytest.mark.asyncio]


async def test_access_token_identifies_connection(consumer_app, registry, buyer):
    token = str(AccessToken.for_user(buyer))
    communicator = WebsocketCommunicator(JWTAuthMiddleware(consumer_app()), f"/ws/?token={token}")
    connected, _ = await communicator.connect()
    assert connected

    await communicator.send_json_to({"type": "auth", "userId": buyer.id})

    assert await communicator.receive_json_from() == {"type": "auth_success"}
    assert await registry.user_ids() == {buyer.id}
    await communicator.disconnect()


async def test_invalid_token_leaves_connection_anonymous(consumer_app, buyer):
    communicator = WebsocketCommunicator(JWTAuthMiddleware(consumer_app()), "/ws/?token=not-a-jwt")
    connected, _ = await communicator.connect()
    assert connected

    await communicator.send_json_to({"type": "auth", "userId": buyer.id})
    reply = await communicator.receive_json_from()

    assert reply["code"] == "authentication_required"
    await communicator.disconnect()
