from django.contrib import admin
from .models import Chat, Message


class MessageInline(admin.TabularInline):
    model = Message
    extra = 0
    readonly_fields = ("sender", "text", "created_at")


@admin.register(Chat)
class ChatAdmin(admin.ModelAdmin):
    list_display = ("id", "product", "buyer", "seller", "order_type", "is_completed", "created_at")
    list_filter = ("order_type", "is_completed")
    search_fields = ("product__title", "buyer__username", "seller__username")
    inlines = [MessageInline]
