"""
ユーザーごとの WebSocket 接続の管理。

1 ユーザーが複数タブ・複数端末でつないでいる前提で、接続は集合で持つ。
マップの読み書きは 1 つの asyncio.Lock の中だけで行い、送信はロック外で行う。
"""
import asyncio
import logging

logger = logging.getLogger(__name__)


class ConnectionRegistry:

    def __init__(self):
        self._connections = {}
        self._lock = asyncio.Lock()

    async def register(self, user_id, handle):
        async with self._lock:
            self._connections.setdefault(user_id, set()).add(handle)

    async def unregister(self, user_id, handle):
        async with self._lock:
            handles = self._connections.get(user_id)
            if handles is None:
                return
            handles.discard(handle)
            # 空になったユーザーは消す（切断済みユーザーでマップを太らせない）
            if not handles:
                del self._connections[user_id]

    async def connections_for(self, user_id):
        async with self._lock:
            return set(self._connections.get(user_id, ()))

    async def user_ids(self):
        async with self._lock:
            return set(self._connections)

    async def send(self, user_id, event):
        """接続が無ければ何もしない。キューもリトライもしない。"""
        handles = await self.connections_for(user_id)
        return await self._deliver(handles, event)

    async def broadcast_all(self, event):
        async with self._lock:
            handles = [h for hs in self._connections.values() for h in hs]
        return await self._deliver(handles, event)

    async def _deliver(self, handles, event):
        delivered = 0
        for handle in handles:
            try:
                await handle.send_json(event)
            except Exception as exc:
                # 切断済みの接続への送信は捨てる。他の接続には送り続ける
                logger.warning("dropped %s event for %r: %s", event.get("type"), handle, exc)
            else:
                delivered += 1
        return delivered


# プロセス内で共有する既定のレジストリ
connections = ConnectionRegistry()
