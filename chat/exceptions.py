"""
チャット/取引まわりのエラー。

DRF の APIException を継承しているので、REST ではそのまま HTTP エラーとして返り、
WebSocket では consumer が error イベントに変換して送信元の接続だけに返す。
"""
from rest_framework import exceptions, status


class ChatError(exceptions.APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Request failed"
    default_code = "error"

    @property
    def code(self):
        return getattr(self.detail, "code", self.default_code)


class AuthenticationRequired(ChatError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Authentication required"
    default_code = "authentication_required"


class AuthorizationError(ChatError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Not authorized for this chat"
    default_code = "forbidden"


class NotFoundError(ChatError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"
    default_code = "not_found"


class InvalidStateError(ChatError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Chat is completed"
    default_code = "invalid_state"


class ValidationError(ChatError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid message format"
    default_code = "invalid"


class PersistenceError(ChatError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "Storage is temporarily unavailable"
    default_code = "persistence_error"
