from urllib.parse import parse_qs

from channels.db import database_sync_to_async
from channels.middleware import BaseMiddleware
from django.contrib.auth import get_user_model
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import AccessToken


@database_sync_to_async
def get_user_for_token(raw_token):
    try:
        token = AccessToken(raw_token)
    except TokenError:
        return None
    User = get_user_model()
    lookup = {api_settings.USER_ID_FIELD: token.get(api_settings.USER_ID_CLAIM)}
    return User.objects.filter(is_active=True, **lookup).first()


class JWTAuthMiddleware(BaseMiddleware):
    """
    ws://.../ws/?token=<access token> で接続してきた場合に scope["user"] を埋める。
    ブラウザのセッションで来た場合は AuthMiddlewareStack 側の user がそのまま残る。
    """

    async def __call__(self, scope, receive, send):
        query = parse_qs(scope.get("query_string", b"").decode())
        raw_token = (query.get("token") or [None])[0]
        if raw_token:
            user = await get_user_for_token(raw_token)
            if user is not None:
                scope = dict(scope, user=user)
        return await super().__call__(scope, receive, send)
