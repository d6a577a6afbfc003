"""
ステートマシン（transitions）と永続化（gateway）をつなぐ処理。
REST の views と WebSocket の consumer の両方からここを呼ぶ。
"""
import logging
from dataclasses import dataclass

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.db import DatabaseError, transaction

from . import gateway
from .exceptions import ChatError, InvalidStateError, PersistenceError
from .transitions import (
    ORDER_TYPE_ACTORS, SELLER, Complete, SelectOrderType,
    check_can_message, check_participant, check_update, is_sold_retry,
)

logger = logging.getLogger(__name__)


@dataclass
class UpdateResult:
    chat: object
    completed_now: bool = False
    product_sold_now: bool = False

    @property
    def product_id(self):
        return self.chat.product_id

    @property
    def announce_sold(self):
        """今回チャットを完了した、または完了済みチャットの再実行で商品を販売済みにできた"""
        return self.completed_now or self.product_sold_now


def order_type_actor():
    actor = getattr(settings, "CHAT_ORDER_TYPE_ACTOR", SELLER)
    if actor not in ORDER_TYPE_ACTORS:
        raise ImproperlyConfigured(
            f"CHAT_ORDER_TYPE_ACTOR must be one of {ORDER_TYPE_ACTORS}, got {actor!r}"
        )
    return actor


def get_chat_for(chat_id, user_id):
    chat = gateway.get_chat(chat_id)
    check_participant(chat, user_id)
    return chat


def messages_for(chat_id, user_id):
    get_chat_for(chat_id, user_id)
    return gateway.messages_for_chat(chat_id)


def post_message(chat_id, sender_id, text):
    """完了チェックとメッセージ作成を同じトランザクションで行う。"""
    try:
        with transaction.atomic():
            chat = gateway.get_chat(chat_id, for_update=True)
            check_can_message(chat, sender_id)
            message = gateway.create_message(chat, sender_id, text)
    except DatabaseError as exc:
        # commit 時の失敗
        raise PersistenceError() from exc
    return chat, message


def update_chat(chat_id, actor_id, transitions):
    """
    検証をすべて通してから書き込む。
    チャット行への書き込み（order type と完了）は 1 つのトランザクションにまとめ、
    途中で失敗したら order type も残さない。
    「商品を販売済み」はその外で独立した一方向の更新として書く。
    後者が失敗してもチャット完了は巻き戻さず、同じ完了リクエストの再実行で揃える。
    """
    chat = gateway.get_chat(chat_id)
    product = gateway.get_product(chat.product_id)
    reconcile = is_sold_retry(chat, product, transitions)
    check_update(chat, product, actor_id, transitions, order_type_actor(), reconcile=reconcile)

    result = UpdateResult(chat=chat)
    if reconcile:
        result.product_sold_now = gateway.mark_product_sold(chat.product_id)
        if result.product_sold_now:
            logger.info("chat=%s: product=%s marked sold on retry", chat.pk, chat.product_id)
        return result

    before = (chat.order_type, chat.is_completed)
    try:
        with transaction.atomic():
            for t in transitions:
                if isinstance(t, SelectOrderType):
                    if not gateway.set_order_type(chat, t.order_type):
                        raise InvalidStateError("Chat is completed")
                elif isinstance(t, Complete):
                    if not gateway.complete_chat(chat):
                        raise InvalidStateError("Chat is completed")
                    result.completed_now = True
    except (ChatError, DatabaseError) as exc:
        # ロールバックされたのでメモリ上のインスタンスも元に戻す
        chat.order_type, chat.is_completed = before
        if isinstance(exc, DatabaseError):
            raise PersistenceError() from exc
        raise

    if result.completed_now:
        result.product_sold_now = gateway.mark_product_sold(chat.product_id)
        if not result.product_sold_now:
            logger.info("chat=%s completed; product=%s was already sold", chat.pk, chat.product_id)
    return result
