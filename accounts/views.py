# accounts/views.py
from django.contrib.auth import get_user_model
from rest_framework import generics, mixins, permissions, response, views, viewsets

from .serializers import RegisterSerializer, PublicUserSerializer
from .models import Profile

User = get_user_model()


class RegisterView(generics.CreateAPIView):
    queryset = User.objects.all()
    serializer_class = RegisterSerializer
    permission_classes = [permissions.AllowAny]


class MeView(views.APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        u = request.user
        profile, _ = Profile.objects.get_or_create(user=u)
        return response.Response({
            "id": u.id,
            "username": u.get_username(),
            "accepted_terms": profile.accepted_terms,
        })


class AcceptTermsView(views.APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):
        profile, _ = Profile.objects.get_or_create(user=request.user)
        profile.accept_terms()
        return response.Response({"success": True, "accepted_terms": profile.accepted_terms})


class UserViewSet(mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    """GET /users/{id}/ 相手ユーザーの表示用（一覧は出さない）"""
    queryset = User.objects.select_related("profile")
    serializer_class = PublicUserSerializer
    permission_classes = [permissions.IsAuthenticated]
