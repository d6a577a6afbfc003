from django.contrib import admin
from .models import Product, ProductImage


class ProductImageInline(admin.TabularInline):
    model = ProductImage
    extra = 0


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("id", "title", "seller", "price", "category", "is_sold", "created_at")
    list_filter = ("is_sold", "category", "condition")
    search_fields = ("title", "description", "seller__username")
    inlines = [ProductImageInline]
