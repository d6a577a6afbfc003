"""
チャットの取引ステートマシン。

    Open(order_type=None) → OrderTypeSelected(order_type) → Completed（終端）

ここは DB に触らない。検証はすべて書き込み前に済ませ、失敗したら何も変更しない。
"""
from dataclasses import dataclass

from marketplace.models import OrderType

from .exceptions import AuthorizationError, InvalidStateError, ValidationError

SELLER = "seller"
BUYER = "buyer"
PARTICIPANT = "participant"
ORDER_TYPE_ACTORS = (SELLER, BUYER, PARTICIPANT)


@dataclass(frozen=True)
class SelectOrderType:
    order_type: str


@dataclass(frozen=True)
class Complete:
    pass


def parse_update(order_type=None, is_completed=None):
    """更新内容を遷移のリストにする。order type を先に、完了を最後に並べる。"""
    transitions = []
    if order_type:
        if order_type not in OrderType.values:
            raise ValidationError(f"Unknown order type: {order_type}")
        transitions.append(SelectOrderType(order_type))
    if is_completed:
        transitions.append(Complete())
    if not transitions:
        raise ValidationError("Nothing to update")
    return transitions


def check_participant(chat, user_id):
    if not chat.is_participant(user_id):
        raise AuthorizationError("Not authorized for this chat")


def check_open(chat):
    if chat.is_completed:
        raise InvalidStateError("Chat is completed")


def check_can_message(chat, user_id):
    check_participant(chat, user_id)
    check_open(chat)


def may_select_order_type(chat, actor_id, order_type_actor):
    if order_type_actor == PARTICIPANT:
        return chat.is_participant(actor_id)
    if order_type_actor == BUYER:
        return actor_id == chat.buyer_id
    return actor_id == chat.seller_id


def is_sold_retry(chat, product, transitions):
    """
    完了済みなのに商品が売れていない（販売済みへの書き込みだけ失敗した）チャットへの
    完了のみの再リクエスト。チャットには書かず、商品側だけ揃え直す。
    """
    return chat.is_completed and not product.is_sold and transitions == [Complete()]


def check_update(chat, product, actor_id, transitions, order_type_actor=SELLER, reconcile=False):
    check_participant(chat, actor_id)

    for t in transitions:
        if isinstance(t, Complete) and actor_id != chat.seller_id:
            raise AuthorizationError("Only seller can update chat")
        if isinstance(t, SelectOrderType) and not may_select_order_type(chat, actor_id, order_type_actor):
            raise AuthorizationError(f"Only {order_type_actor} can select the order type")

    if not reconcile:
        check_open(chat)

    # 出品者が受け付けていない受け渡し方法は選べない
    for t in transitions:
        if isinstance(t, SelectOrderType) and not product.allows_order_type(t.order_type):
            raise InvalidStateError(f"Order type '{t.order_type}' is not offered for this product")
