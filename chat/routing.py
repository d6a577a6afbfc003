"""
WebSocket の URL ルーティング。

チャットのリアルタイム機能はすべて 1 本の接続 ws://<host>/ws に多重化する。
"""
from django.urls import re_path

from .consumers import ChatConsumer

websocket_urlpatterns = [
    re_path(r"^ws/?$", ChatConsumer.as_asgi()),
]
