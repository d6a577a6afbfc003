from django.db import models
from django.contrib.auth import get_user_model
from django.db.models.signals import post_save
from django.dispatch import receiver
from django.utils import timezone

User = get_user_model()


class Profile(models.Model):
    user = models.OneToOneField(
        User,
        on_delete=models.CASCADE,
        related_name="profile",
    )
    # 利用規約への同意（False → True の一方向のみ）
    accepted_terms = models.BooleanField(default=False)
    accepted_terms_at = models.DateTimeField(null=True, blank=True)

    def __str__(self):
        return self.user.username

    def accept_terms(self):
        """同意済みなら何もしない。初回だけ日時を記録する。"""
        if self.accepted_terms:
            return False
        self.accepted_terms = True
        self.accepted_terms_at = timezone.now()
        self.save(update_fields=["accepted_terms", "accepted_terms_at"])
        return True


@receiver(post_save, sender=User)
def create_profile(sender, instance, created, **kwargs):
    if created:
        Profile.objects.get_or_create(user=instance)
