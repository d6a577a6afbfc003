import logging

from channels.db import database_sync_to_async
from channels.generic.websocket import AsyncJsonWebsocketConsumer
from django.conf import settings

from . import gateway, services
from .events import (
    auth_success_event, chat_update_event, error_event,
    message_event, product_sold_event,
)
from .exceptions import AuthenticationRequired, AuthorizationError, ChatError, ValidationError
from .registry import connections
from .serializers import EVENT_SERIALIZERS, flatten_errors
from .transitions import parse_update

logger = logging.getLogger(__name__)


class ChatConsumer(AsyncJsonWebsocketConsumer):
    """
    チャットのリアルタイム窓口（1 クライアント 1 接続）。

    Channels は 1 接続のイベントを順番に await するので、同じ接続から来た
    イベントは届いた順に DB 書き込みと配信まで終わってから次に進む。
    どんな失敗も error イベントを送信元に 1 つ返すだけで、接続は切らない。
    """

    # テストではサブクラスで差し替える
    registry = connections

    async def connect(self):
        self.user_id = None
        await self.accept()
        session_user = self.scope.get("user")
        logger.info(
            "websocket connected (session user=%s)",
            session_user.pk if session_user is not None and session_user.is_authenticated else None,
        )

    async def disconnect(self, code):
        if self.user_id is not None:
            await self.registry.unregister(self.user_id, self)
        logger.info("user=%s disconnected (code=%s)", self.user_id, code)

    async def receive(self, text_data=None, bytes_data=None, **kwargs):
        if text_data is None:
            await self.send_error(ValidationError())
            return
        try:
            content = await self.decode_json(text_data)
        except ValueError:
            await self.send_error(ValidationError())
            return
        await self.receive_json(content, **kwargs)

    async def receive_json(self, content, **kwargs):
        try:
            await self.dispatch_event(content)
        except ChatError as exc:
            logger.info("rejected event from user=%s: %s (%s)", self.user_id, exc.detail, exc.code)
            await self.send_error(exc)
        except Exception:
            logger.exception("unexpected failure handling event from user=%s", self.user_id)
            await self.send_json(error_event("Internal server error", code="error"))

    async def send_error(self, exc):
        await self.send_json(error_event(exc.detail, code=exc.code))

    async def dispatch_event(self, content):
        event_type = content.get("type") if isinstance(content, dict) else None

        # auth 以外は本人確認済みの接続でのみ受け付ける
        if event_type != "auth" and self.user_id is None:
            raise AuthenticationRequired()

        serializer_class = EVENT_SERIALIZERS.get(event_type)
        if serializer_class is None:
            raise ValidationError(f"Unknown event type: {event_type}")
        serializer = serializer_class(data=content)
        if not serializer.is_valid():
            raise ValidationError(flatten_errors(serializer.errors))

        handler = getattr(self, f"on_{event_type}")
        await handler(serializer.validated_data)

    # ========= イベントごとの処理 =========

    async def on_auth(self, data):
        claimed = data["userId"]

        if getattr(settings, "CHAT_TRUST_CLIENT_IDENTITY", False):
            await database_sync_to_async(gateway.get_user)(claimed)
        else:
            # 接続時にセッション/JWT で確定した本人とだけ結びつける
            session_user = self.scope.get("user")
            if session_user is None or not session_user.is_authenticated:
                raise AuthenticationRequired()
            if session_user.pk != claimed:
                raise AuthorizationError("Claimed user does not match the session")

        if self.user_id != claimed:
            if self.user_id is not None:
                await self.registry.unregister(self.user_id, self)
            self.user_id = claimed
            await self.registry.register(claimed, self)
            logger.info("user=%s authenticated", claimed)

        await self.send_json(auth_success_event())

    async def on_new_message(self, data):
        chat, message = await database_sync_to_async(services.post_message)(
            data["chatId"], self.user_id, data["text"]
        )
        event = message_event(message)
        await self.registry.send(chat.other_participant_id(self.user_id), event)
        # 送信者の全タブに確認を返す（この接続にもちょうど 1 回届く）
        await self.registry.send(self.user_id, event)

    async def on_update_chat(self, data):
        transitions = parse_update(
            order_type=data.get("orderType"),
            is_completed=data.get("isCompleted"),
        )
        result = await database_sync_to_async(services.update_chat)(
            data["chatId"], self.user_id, transitions
        )

        if result.announce_sold:
            # 商品ページを見ている全員に売り切れを知らせる
            await self.registry.broadcast_all(product_sold_event(result.product_id))
            logger.info("product=%s sold via chat=%s", result.product_id, result.chat.pk)

        event = chat_update_event(result.chat)
        await self.registry.send(result.chat.other_participant_id(self.user_id), event)
        await self.registry.send(self.user_id, event)
