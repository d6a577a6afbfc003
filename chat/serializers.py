from rest_framework import serializers

from marketplace.models import OrderType
from .models import Chat, Message


# ========= REST =========

class ChatSerializer(serializers.ModelSerializer):
    class Meta:
        model = Chat
        fields = ["id", "product", "buyer", "seller", "order_type", "is_completed", "created_at"]
        read_only_fields = fields


class ChatCreateSerializer(serializers.Serializer):
    product = serializers.IntegerField(min_value=1)


class ChatUpdateSerializer(serializers.Serializer):
    order_type = serializers.ChoiceField(choices=OrderType.choices, required=False, allow_null=True)
    is_completed = serializers.BooleanField(required=False)


class MessageSerializer(serializers.ModelSerializer):
    class Meta:
        model = Message
        fields = ["id", "chat", "sender", "text", "created_at"]
        read_only_fields = ["id", "chat", "sender", "created_at"]


# ========= WebSocket（クライアント → サーバー） =========
# プロトコルのキーはフロントに合わせて camelCase

class AuthEventSerializer(serializers.Serializer):
    userId = serializers.IntegerField(min_value=1)


class NewMessageEventSerializer(serializers.Serializer):
    chatId = serializers.IntegerField(min_value=1)
    text = serializers.CharField(max_length=5000)


class UpdateChatEventSerializer(serializers.Serializer):
    chatId = serializers.IntegerField(min_value=1)
    orderType = serializers.ChoiceField(choices=OrderType.choices, required=False, allow_null=True)
    isCompleted = serializers.BooleanField(required=False)


EVENT_SERIALIZERS = {
    "auth": AuthEventSerializer,
    "new_message": NewMessageEventSerializer,
    "update_chat": UpdateChatEventSerializer,
}


def flatten_errors(errors):
    """{"chatId": ["..."]} → "chatId: ..." の 1 行にする"""
    parts = []
    for field, msgs in errors.items():
        msg = msgs[0] if isinstance(msgs, list) and msgs else msgs
        parts.append(f"{field}: {msg}")
    return "; ".join(parts)
