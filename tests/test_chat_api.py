import pytest

from chat.models import Chat, Message

pytestmark = pytest.mark.django_db


def test_chat_endpoints_require_login(api_client, chat):
    assert api_client.get("/api/v1/chats/").status_code == 401
    assert api_client.get(f"/api/v1/chats/{chat.id}/messages/").status_code == 401
    assert api_client.patch(f"/api/v1/chats/{chat.id}/", {"is_completed": True}, format="json").status_code == 401


def test_start_chat_is_idempotent(api_client, buyer, seller, product):
    api_client.force_authenticate(buyer)

    first = api_client.post("/api/v1/chats/", {"product": product.id}, format="json")
    second = api_client.post("/api/v1/chats/", {"product": product.id}, format="json")

    assert first.status_code == 201
    assert second.status_code == 200
    assert first.data["id"] == second.data["id"]
    assert first.data["seller"] == seller.id
    assert first.data["buyer"] == buyer.id
    assert first.data["order_type"] is None
    assert Chat.objects.count() == 1


def test_seller_cannot_start_chat_with_self(api_client, seller, product):
    api_client.force_authenticate(seller)
    res = api_client.post("/api/v1/chats/", {"product": product.id}, format="json")
    assert res.status_code == 400


def test_list_only_my_chats(api_client, buyer, stranger, chat):
    api_client.force_authenticate(buyer)
    res = api_client.get("/api/v1/chats/")
    assert [c["id"] for c in res.data["results"]] == [chat.id]

    api_client.force_authenticate(stranger)
    res = api_client.get("/api/v1/chats/")
    assert res.data["results"] == []


def test_stranger_cannot_read_chat(api_client, stranger, chat):
    api_client.force_authenticate(stranger)
    assert api_client.get(f"/api/v1/chats/{chat.id}/").status_code == 403
    assert api_client.get(f"/api/v1/chats/{chat.id}/messages/").status_code == 403


def test_message_history_is_ascending(api_client, buyer, seller, chat):
    for sender, text in [(buyer, "hi"), (seller, "hello"), (buyer, "price?")]:
        Message.objects.create(chat=chat, sender=sender, text=text)

    api_client.force_authenticate(seller)
    res = api_client.get(f"/api/v1/chats/{chat.id}/messages/")

    assert res.status_code == 200
    assert [m["text"] for m in res.data] == ["hi", "hello", "price?"]


def test_post_message_over_rest(api_client, buyer, chat):
    api_client.force_authenticate(buyer)
    res = api_client.post(f"/api/v1/chats/{chat.id}/messages/", {"text": "On my way"}, format="json")

    assert res.status_code == 201
    assert res.data["sender"] == buyer.id
    assert Message.objects.get().text == "On my way"


def test_patch_follows_same_rules(api_client, buyer, seller, chat, product):
    api_client.force_authenticate(buyer)
    res = api_client.patch(f"/api/v1/chats/{chat.id}/", {"is_completed": True}, format="json")
    assert res.status_code == 403

    api_client.force_authenticate(seller)
    res = api_client.patch(
        f"/api/v1/chats/{chat.id}/", {"order_type": "delivery", "is_completed": True}, format="json"
    )
    assert res.status_code == 200
    assert res.data["order_type"] == "delivery"
    assert res.data["is_completed"] is True
    product.refresh_from_db()
    assert product.is_sold is True

    res = api_client.patch(f"/api/v1/chats/{chat.id}/", {"is_completed": True}, format="json")
    assert res.status_code == 409

    api_client.force_authenticate(buyer)
    res = api_client.post(f"/api/v1/chats/{chat.id}/messages/", {"text": "thanks"}, format="json")
    assert res.status_code == 409
    assert Message.objects.count() == 0


def test_patch_rejects_unknown_order_type(api_client, seller, chat):
    api_client.force_authenticate(seller)
    res = api_client.patch(f"/api/v1/chats/{chat.id}/", {"order_type": "teleport"}, format="json")
    assert res.status_code == 400


def test_missing_chat_is_404(api_client, buyer):
    api_client.force_authenticate(buyer)
    assert api_client.get("/api/v1/chats/424242/").status_code == 404
