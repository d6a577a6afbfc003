from django.contrib import admin
from .models import Profile


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "accepted_terms", "accepted_terms_at")
    list_filter = ("accepted_terms",)
    search_fields = ("user__username",)
