from django.contrib import admin
from django.urls import path, include
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework_nested import routers
from marketplace.views import ProductViewSet
from chat.views import ChatViewSet, ChatMessageViewSet
from accounts.views import RegisterView, MeView, AcceptTermsView, UserViewSet

router = routers.DefaultRouter()
router.register(r"products", ProductViewSet, basename="products")
router.register(r"chats", ChatViewSet, basename="chats")
router.register(r"users", UserViewSet, basename="users")

# ネスト: /chats/{chat_id}/messages/
chats_router = routers.NestedDefaultRouter(router, r"chats", lookup="chat")
chats_router.register(r"messages", ChatMessageViewSet, basename="chat-messages")

urlpatterns = [
    path("admin/", admin.site.urls),

    # API
    path("api/v1/", include(router.urls)),
    path("api/v1/", include(chats_router.urls)),

    # Auth API & Docs
    path("api/v1/auth/register/", RegisterView.as_view(), name="register"),
    path("api/v1/auth/jwt/create/", TokenObtainPairView.as_view(), name="jwt-create"),
    path("api/v1/auth/jwt/refresh/", TokenRefreshView.as_view(), name="jwt-refresh"),
    path("api/v1/auth/me/", MeView.as_view(), name="me"),
    path("api/v1/auth/terms/accept/", AcceptTermsView.as_view(), name="accept-terms"),
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api/docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
]
