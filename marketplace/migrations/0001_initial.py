from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Product",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=120)),
                ("description", models.TextField()),
                ("category", models.CharField(max_length=60)),
                ("condition", models.CharField(choices=[("new", "新品"), ("like_new", "未使用に近い"), ("good", "目立った傷や汚れなし"), ("fair", "やや傷や汚れあり"), ("poor", "全体的に状態が悪い")], max_length=20)),
                ("location", models.CharField(max_length=120)),
                ("price", models.PositiveIntegerField()),
                ("is_sold", models.BooleanField(default=False)),
                ("allow_campus_meetup", models.BooleanField(default=True)),
                ("allow_delivery", models.BooleanField(default=False)),
                ("allow_pickup", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("seller", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="products", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["-created_at", "-id"],
            },
        ),
        migrations.CreateModel(
            name="ProductImage",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("url", models.CharField(max_length=500)),
                ("position", models.PositiveIntegerField(default=0)),
                ("product", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="images", to="marketplace.product")),
            ],
            options={
                "ordering": ["position", "id"],
            },
        ),
    ]
