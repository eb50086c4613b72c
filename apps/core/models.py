"""
Core models for the point-of-sale back end.

The user is the owner of everything else in the system: products, transactions
and the dashboards built on them are all scoped to a single user.
"""

from django.contrib.auth.models import AbstractUser
from django.contrib.auth.models import UserManager as DjangoUserManager
from django.db import models


class UserManager(DjangoUserManager):
    """
    Manager that creates users from an email address.

    The username is kept for compatibility with Django's admin and defaults
    to the email address when not supplied.
    """

    def create_user(self, email, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)
        username = extra_fields.pop("username", None) or email
        return self._create_user(username, email, password, **extra_fields)

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        username = extra_fields.pop("username", None) or email
        return self._create_user(username, email, password, **extra_fields)


class User(AbstractUser):
    """
    Shop owner account.

    Users sign in with their email address. Every product and transaction
    belongs to exactly one user.
    """

    email = models.EmailField(
        unique=True,
        help_text="Email address used to sign in",
    )

    full_name = models.CharField(
        max_length=255,
        help_text="User's display name",
    )

    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="When the user was last updated",
    )

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["full_name"]

    objects = UserManager()

    class Meta:
        db_table = "users"
        ordering = ["email"]
        verbose_name = "User"
        verbose_name_plural = "Users"

    def __str__(self):
        return f"{self.full_name} <{self.email}>"

    def get_full_name(self):
        """Return the user's display name, falling back to the email."""
        return self.full_name or self.email
