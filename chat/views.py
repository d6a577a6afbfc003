from drf_spectacular.utils import extend_schema
from rest_framework import viewsets, permissions, response, status

from . import gateway, services
from .models import Chat, Message
from .serializers import (
    ChatSerializer, ChatCreateSerializer, ChatUpdateSerializer, MessageSerializer,
)
from .transitions import parse_update


class ChatViewSet(viewsets.GenericViewSet):
    """
    チャットの一覧・開始・詳細・更新（リアルタイムでない経路）。
    更新のルールは WebSocket の update_chat と同じ。REST からの書き込みは配信しない。
    """
    queryset = Chat.objects.none()
    serializer_class = ChatSerializer
    permission_classes = [permissions.IsAuthenticated]
    lookup_value_regex = r"\d+"

    def list(self, request):
        chats = gateway.chats_for_user(request.user.id)
        page = self.paginate_queryset(chats)
        if page is not None:
            return self.get_paginated_response(ChatSerializer(page, many=True).data)
        return response.Response(ChatSerializer(chats, many=True).data)

    @extend_schema(request=ChatCreateSerializer, responses=ChatSerializer)
    def create(self, request):
        serializer = ChatCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        chat, created = gateway.get_or_create_chat(
            serializer.validated_data["product"], request.user.id
        )
        return response.Response(
            ChatSerializer(chat).data,
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )

    def retrieve(self, request, pk=None):
        chat = services.get_chat_for(int(pk), request.user.id)
        return response.Response(ChatSerializer(chat).data)

    @extend_schema(request=ChatUpdateSerializer, responses=ChatSerializer)
    def partial_update(self, request, pk=None):
        serializer = ChatUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        transitions = parse_update(
            order_type=serializer.validated_data.get("order_type"),
            is_completed=serializer.validated_data.get("is_completed"),
        )
        result = services.update_chat(int(pk), request.user.id, transitions)
        return response.Response(ChatSerializer(result.chat).data)


class ChatMessageViewSet(viewsets.GenericViewSet):
    """/chats/{chat_pk}/messages/ 履歴は古い順に全件返す"""
    queryset = Message.objects.none()
    serializer_class = MessageSerializer
    permission_classes = [permissions.IsAuthenticated]
    pagination_class = None

    def list(self, request, chat_pk=None):
        messages = services.messages_for(int(chat_pk), request.user.id)
        return response.Response(MessageSerializer(messages, many=True).data)

    def create(self, request, chat_pk=None):
        serializer = MessageSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        _, message = services.post_message(
            int(chat_pk), request.user.id, serializer.validated_data["text"]
        )
        return response.Response(MessageSerializer(message).data, status=status.HTTP_201_CREATED)
