"""
Users — Models

Custom User model with UUID PK, username-based auth and a single
ledger role (admin / editor / viewer). The role is the only piece of
identity the stock ledger consumes.

@file users/models.py
"""

from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from core.models import BaseModel
from users.managers import UserManager


class User(AbstractBaseUser, PermissionsMixin, BaseModel):
    """Application user. ``role`` drives every ledger write decision."""

    class Role(models.TextChoices):
        ADMIN = 'admin', _('Administrator')
        EDITOR = 'editor', _('Editor')
        VIEWER = 'viewer', _('Viewer')

    username = models.CharField(_('username'), max_length=150, unique=True)
    full_name = models.CharField(_('full name'), max_length=200, blank=True)
    email = models.EmailField(_('email'), unique=True, null=True, blank=True)
    role = models.CharField(
        _('role'), max_length=10,
        choices=Role.choices, default=Role.VIEWER,
        db_index=True,
    )

    is_staff = models.BooleanField(_('staff status'), default=False)
    is_active = models.BooleanField(_('active'), default=True)
    date_joined = models.DateTimeField(_('date joined'), default=timezone.now)

    objects = UserManager()

    USERNAME_FIELD = 'username'
    REQUIRED_FIELDS = []

    class Meta:
        verbose_name = _('user')
        verbose_name_plural = _('users')
        ordering = ['username']

    def __str__(self):
        return self.get_full_name()

    def get_full_name(self):
        return self.full_name.strip() or self.username

    def get_short_name(self):
        return self.get_full_name().split()[0]

    @property
    def initials(self) -> str:
        """Two-letter badge shown next to ledger rows."""
        parts = self.get_full_name().split()
        if len(parts) >= 2:
            return (parts[0][0] + parts[-1][0]).upper()
        return self.get_full_name()[:2].upper()

    @property
    def is_admin(self) -> bool:
        return self.role == self.Role.ADMIN
