"""サーバー → クライアントのイベント（JSON）"""


def _isoformat(dt):
    return dt.isoformat() if dt else None


def message_payload(message):
    return {
        "id": message.id,
        "chatId": message.chat_id,
        "senderId": message.sender_id,
        "text": message.text,
        "createdAt": _isoformat(message.created_at),
    }


def auth_success_event():
    return {"type": "auth_success"}


def message_event(message):
    return {
        "type": "message",
        "chatId": message.chat_id,
        "message": message_payload(message),
    }


def chat_update_event(chat):
    return {
        "type": "chat_update",
        "chat": {
            "id": chat.id,
            "orderType": chat.order_type,
            "isCompleted": chat.is_completed,
        },
    }


def product_sold_event(product_id):
    return {"type": "product_sold", "productId": product_id}


def error_event(message, code=None):
    event = {"type": "error", "message": str(message)}
    if code:
        event["code"] = code
    return event
