from django.contrib.auth import get_user_model
from rest_framework import serializers

from .models import Profile

User = get_user_model()


class RegisterSerializer(serializers.ModelSerializer):
    password = serializers.CharField(write_only=True)
    accepted_terms = serializers.BooleanField(write_only=True, required=False, default=False)

    class Meta:
        model = User
        fields = ["id", "username", "password", "accepted_terms"]

    def create(self, validated_data):
        accepted = validated_data.pop("accepted_terms", False)
        user = User(username=validated_data["username"])
        user.set_password(validated_data["password"])
        user.save()
        if accepted:
            profile, _ = Profile.objects.get_or_create(user=user)
            profile.accept_terms()
        return user


class PublicUserSerializer(serializers.ModelSerializer):
    """パスワードなどを含まない公開用ユーザー情報"""
    accepted_terms = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ["id", "username", "accepted_terms"]

    def get_accepted_terms(self, obj):
        profile = getattr(obj, "profile", None)
        return bool(profile and profile.accepted_terms)
