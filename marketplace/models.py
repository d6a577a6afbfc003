# marketplace/models.py

from django.conf import settings
from django.db import models

User = settings.AUTH_USER_MODEL


class OrderType(models.TextChoices):
    """受け渡し方法。Product の allow_* フラグと 1 対 1 で対応する"""
    CAMPUS   = "campus",   "キャンパス内で手渡し"
    DELIVERY = "delivery", "配達"
    PICKUP   = "pickup",   "引き取り"


class Product(models.Model):
    class Condition(models.TextChoices):
        NEW      = "new",      "新品"
        LIKE_NEW = "like_new", "未使用に近い"
        GOOD     = "good",     "目立った傷や汚れなし"
        FAIR     = "fair",     "やや傷や汚れあり"
        POOR     = "poor",     "全体的に状態が悪い"

    seller = models.ForeignKey(User, on_delete=models.CASCADE, related_name="products")
    title = models.CharField(max_length=120)
    description = models.TextField()
    category = models.CharField(max_length=60)
    condition = models.CharField(max_length=20, choices=Condition.choices)
    location = models.CharField(max_length=120)

    # 価格は最小通貨単位（円ならそのまま、ドルならセント）
    price = models.PositiveIntegerField()

    # 取引が完了したら True（チャット側からのみ変更）
    is_sold = models.BooleanField(default=False)

    # 受け渡し方法
    allow_campus_meetup = models.BooleanField(default=True)
    allow_delivery = models.BooleanField(default=False)
    allow_pickup = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return self.title

    def allows_order_type(self, order_type):
        flags = {
            OrderType.CAMPUS: self.allow_campus_meetup,
            OrderType.DELIVERY: self.allow_delivery,
            OrderType.PICKUP: self.allow_pickup,
        }
        return bool(flags.get(order_type, False))

    @property
    def image_urls(self):
        return [img.url for img in self.images.all()]


class ProductImage(models.Model):
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="images")
    url = models.CharField(max_length=500)
    position = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["position", "id"]

    def __str__(self):
        return self.url
