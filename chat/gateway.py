"""
永続化ゲートウェイ。ORM への型付きアクセサだけを置く。

見つからない行は NotFoundError、DB 側の失敗は PersistenceError に揃える。
どれも同期関数なので、consumer からは database_sync_to_async 経由で呼ぶ。
"""
import functools
import logging

from django.contrib.auth import get_user_model
from django.db import DatabaseError
from django.db.models import Q

from marketplace.models import Product

from .exceptions import NotFoundError, PersistenceError, ValidationError
from .models import Chat, Message

logger = logging.getLogger(__name__)

User = get_user_model()


def guarded(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except DatabaseError as exc:
            logger.exception("storage failure in %s", func.__name__)
            raise PersistenceError() from exc
    return wrapper


# ========= 取得 =========

@guarded
def get_user(user_id):
    try:
        return User.objects.get(pk=user_id)
    except User.DoesNotExist:
        raise NotFoundError("User not found")


@guarded
def get_product(product_id):
    try:
        return Product.objects.get(pk=product_id)
    except Product.DoesNotExist:
        raise NotFoundError("Product not found")


@guarded
def get_chat(chat_id, for_update=False):
    qs = Chat.objects.all()
    if for_update:
        qs = qs.select_for_update()
    try:
        return qs.get(pk=chat_id)
    except Chat.DoesNotExist:
        raise NotFoundError("Chat not found")


@guarded
def chats_for_user(user_id):
    return list(
        Chat.objects.filter(Q(buyer_id=user_id) | Q(seller_id=user_id))
        .select_related("product")
        .order_by("-created_at", "-id")
    )


@guarded
def messages_for_chat(chat_id):
    return list(Message.objects.filter(chat_id=chat_id).order_by("created_at", "id"))


# ========= 作成・更新 =========

@guarded
def get_or_create_chat(product_id, buyer_id):
    """
    (product, buyer, seller) をキーに冪等。seller は常に商品の出品者。
    同時作成はユニーク制約 + get_or_create の再取得で 1 行に収束する。
    """
    product = get_product(product_id)
    if product.seller_id == buyer_id:
        raise ValidationError("You cannot start a chat on your own listing")
    get_user(buyer_id)
    return Chat.objects.get_or_create(
        product_id=product.id,
        buyer_id=buyer_id,
        seller_id=product.seller_id,
    )


@guarded
def create_message(chat, sender_id, text):
    return Message.objects.create(chat=chat, sender_id=sender_id, text=text)


@guarded
def set_order_type(chat, order_type):
    """未完了のチャットだけを更新する。0 行なら False。"""
    updated = Chat.objects.filter(pk=chat.pk, is_completed=False).update(order_type=order_type)
    if updated:
        chat.order_type = order_type
    return bool(updated)


@guarded
def complete_chat(chat):
    """False → True の一方向。今回の呼び出しで完了にできたときだけ True。"""
    updated = Chat.objects.filter(pk=chat.pk, is_completed=False).update(is_completed=True)
    if updated:
        chat.is_completed = True
    return bool(updated)


@guarded
def mark_product_sold(product_id):
    """販売済みにする。すでに販売済みなら False（エラーにはしない）。"""
    return bool(Product.objects.filter(pk=product_id, is_sold=False).update(is_sold=True))
