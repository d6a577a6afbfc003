from django.db import transaction
from rest_framework import serializers
from .models import Product, ProductImage


class ProductSerializer(serializers.ModelSerializer):
    seller = serializers.PrimaryKeyRelatedField(read_only=True)
    # 画像アップロード自体は別サービス。ここでは URI の並びだけ受け取る
    images = serializers.ListField(
        child=serializers.CharField(max_length=500),
        required=False,
        default=list,
        write_only=True,
    )

    class Meta:
        model = Product
        fields = ["id", "title", "description", "price", "condition",
                  "category", "location", "images", "is_sold",
                  "allow_campus_meetup", "allow_delivery", "allow_pickup",
                  "seller", "created_at"]
        read_only_fields = ["is_sold", "created_at"]

    def validate(self, attrs):
        if not any(attrs.get(f, Product._meta.get_field(f).default)
                   for f in ("allow_campus_meetup", "allow_delivery", "allow_pickup")):
            raise serializers.ValidationError("受け渡し方法を少なくとも1つ選んでください。")
        return attrs

    def create(self, validated_data):
        urls = validated_data.pop("images", [])
        with transaction.atomic():
            product = Product.objects.create(**validated_data)
            ProductImage.objects.bulk_create([
                ProductImage(product=product, url=url, position=i)
                for i, url in enumerate(urls)
            ])
        return product

    def to_representation(self, instance):
        data = super().to_representation(instance)
        data["images"] = instance.image_urls
        return data
