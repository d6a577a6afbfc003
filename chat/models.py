from django.conf import settings
from django.db import models

from marketplace.models import OrderType

User = settings.AUTH_USER_MODEL


class Chat(models.Model):
    """
    出品ごとの交渉スレッド。(product, buyer, seller) につき 1 件だけ。
    order_type は未選択(None) → 選択済み、is_completed は False → True の一方向。
    """
    product = models.ForeignKey("marketplace.Product", on_delete=models.CASCADE, related_name="chats")
    buyer   = models.ForeignKey(User, on_delete=models.CASCADE, related_name="chats_as_buyer")
    seller  = models.ForeignKey(User, on_delete=models.CASCADE, related_name="chats_as_seller")
    order_type = models.CharField(max_length=10, choices=OrderType.choices, null=True, blank=True)
    is_completed = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        constraints = [
            models.UniqueConstraint(
                fields=["product", "buyer", "seller"],
                name="uq_chat_product_buyer_seller",
            ),
            models.CheckConstraint(
                condition=~models.Q(buyer=models.F("seller")),
                name="chat_buyer_is_not_seller",
            ),
        ]

    def __str__(self):
        return f"chat={self.pk} product={self.product_id} buyer={self.buyer_id} seller={self.seller_id}"

    def is_participant(self, user_id):
        return user_id in (self.buyer_id, self.seller_id)

    def other_participant_id(self, user_id):
        return self.buyer_id if user_id == self.seller_id else self.seller_id


class Message(models.Model):
    chat = models.ForeignKey(Chat, on_delete=models.CASCADE, related_name="messages")
    sender = models.ForeignKey(User, on_delete=models.CASCADE, related_name="chat_messages")
    text = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at", "id"]

    def __str__(self):
        return f"{self.sender_id}: {self.text[:20]}"
