"""
OneTimePassword model — short-lived codes for password reset.
"""

from django.contrib.auth.hashers import check_password
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from stockmaster.models.enums import OTPPurpose


class OneTimePasswordQuerySet(models.QuerySet):

    def usable(self, email, purpose=OTPPurpose.PASSWORD_RESET):
        """Unused and unexpired codes for an email, newest first."""
        return self.filter(
            email=email.lower(),
            purpose=purpose,
            is_used=False,
            expires_at__gt=timezone.now(),
        ).order_by('-created_at')

    def expired(self):
        return self.filter(expires_at__lte=timezone.now())


class OneTimePassword(models.Model):
    """
    One-time code sent by email.

    Only the hash of the code is stored. A code is redeemable once,
    until expires_at.
    """

    email = models.EmailField(db_index=True, verbose_name=_('Email'))
    code_hash = models.CharField(max_length=128, verbose_name=_('Code hash'))
    purpose = models.CharField(
        max_length=30,
        choices=OTPPurpose.choices,
        default=OTPPurpose.PASSWORD_RESET,
        verbose_name=_('Purpose'),
    )
    expires_at = models.DateTimeField(db_index=True, verbose_name=_('Expires at'))
    is_used = models.BooleanField(default=False, verbose_name=_('Used'))
    created_at = models.DateTimeField(auto_now_add=True)

    objects = OneTimePasswordQuerySet.as_manager()

    class Meta:
        verbose_name = _('One-time password')
        verbose_name_plural = _('One-time passwords')

    @property
    def is_expired(self) -> bool:
        return timezone.now() >= self.expires_at

    def matches(self, code: str) -> bool:
        return check_password(code, self.code_hash)

    def __str__(self) -> str:
        state = 'used' if self.is_used else ('expired' if self.is_expired else 'active')
        return f"OTP {self.email} [{self.purpose}, {state}]"
