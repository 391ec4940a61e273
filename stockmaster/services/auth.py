"""
Accounts — signup, signin, bearer tokens and OTP password reset.

Tokens are Django signed values (django.core.signing), so no token
table is needed:
    - auth token:  {'uid', 'email'}, salt 'stockmaster.auth'
    - reset token: {'email', 'purpose'}, salt 'stockmaster.password_reset'

Password reset flow:
    1. request_password_reset(email)   → emails a numeric OTP
    2. verify_otp(email, code)         → reset token (OTP consumed)
    3. reset_password(token, password) → password changed
"""

import logging
import secrets
from datetime import timedelta

from django.conf import settings
from django.contrib.auth import get_user_model
from django.contrib.auth.hashers import make_password
from django.core import signing
from django.core.exceptions import ValidationError
from django.core.mail import send_mail
from django.core.validators import validate_email
from django.db import transaction
from django.utils import timezone

from stockmaster.conf import stockmaster_settings
from stockmaster.exceptions import AuthError
from stockmaster.models.enums import OTPPurpose
from stockmaster.models.otp import OneTimePassword

logger = logging.getLogger('stockmaster')

AUTH_SALT = 'stockmaster.auth'
RESET_SALT = 'stockmaster.password_reset'


def _normalize_email(email) -> str:
    if email is not None and not isinstance(email, str):
        raise AuthError('INVALID_EMAIL', email=email)
    email = (email or '').strip().lower()
    if not email:
        raise AuthError('EMAIL_REQUIRED')
    return email


def _check_password_strength(password) -> None:
    minimum = stockmaster_settings.MIN_PASSWORD_LENGTH
    if not isinstance(password, str) or len(password) < minimum:
        raise AuthError(
            'WEAK_PASSWORD',
            f'Password must be at least {minimum} characters',
            min_length=minimum,
        )


def _find_user(email):
    return get_user_model().objects.filter(email__iexact=email).first()


class Accounts:
    """Authentication methods."""

    # ══════════════════════════════════════════════════════════════
    # SIGNUP / SIGNIN
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def signup(cls, email, password, full_name=''):
        """
        Create a user. The email (lower-cased) doubles as username.

        Returns:
            (user, auth_token)

        Raises:
            AuthError('EMAIL_REQUIRED' | 'INVALID_EMAIL' | 'WEAK_PASSWORD' | 'USER_EXISTS')
        """
        email = _normalize_email(email)
        try:
            validate_email(email)
        except ValidationError:
            raise AuthError('INVALID_EMAIL', email=email) from None
        _check_password_strength(password)

        User = get_user_model()
        if _find_user(email) or User.objects.filter(**{User.USERNAME_FIELD: email}).exists():
            raise AuthError('USER_EXISTS', email=email)

        fields = {User.USERNAME_FIELD: email}
        if User.USERNAME_FIELD != 'email':
            fields['email'] = email
        user = User.objects.create_user(
            password=password,
            first_name=str(full_name or '').strip()[:150],
            **fields,
        )
        logger.info("auth.signup", extra={"user_id": user.pk})
        return user, cls.issue_token(user)

    @classmethod
    def signin(cls, email, password):
        """
        Check credentials.

        Returns:
            (user, auth_token)

        Raises:
            AuthError('INVALID_CREDENTIALS'): Unknown email or wrong password
            AuthError('ACCOUNT_INACTIVE'): User is deactivated
        """
        email = email.strip().lower() if isinstance(email, str) else ''
        user = _find_user(email) if email else None

        if user is None or not isinstance(password, str) or not user.check_password(password):
            logger.warning("auth.signin.failed", extra={"email": email})
            raise AuthError('INVALID_CREDENTIALS')

        if not user.is_active:
            logger.warning("auth.signin.inactive", extra={"user_id": user.pk})
            raise AuthError('ACCOUNT_INACTIVE')

        user.last_login = timezone.now()
        user.save(update_fields=['last_login'])
        logger.info("auth.signin", extra={"user_id": user.pk})
        return user, cls.issue_token(user)

    # ══════════════════════════════════════════════════════════════
    # TOKENS
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def issue_token(cls, user) -> str:
        return signing.dumps({'uid': user.pk, 'email': user.email}, salt=AUTH_SALT)

    @classmethod
    def user_for_token(cls, token):
        """
        Resolve a bearer token to an active user.

        Raises:
            AuthError('INVALID_TOKEN'): Bad signature, expired, or user gone
            AuthError('ACCOUNT_INACTIVE'): User deactivated since signin
        """
        if not token or not isinstance(token, str):
            raise AuthError('INVALID_TOKEN', 'No token provided')
        try:
            payload = signing.loads(
                token,
                salt=AUTH_SALT,
                max_age=stockmaster_settings.AUTH_TOKEN_MAX_AGE,
            )
        except signing.BadSignature:
            raise AuthError('INVALID_TOKEN') from None

        user = get_user_model().objects.filter(pk=payload.get('uid')).first()
        if user is None:
            raise AuthError('INVALID_TOKEN', 'User not found')
        if not user.is_active:
            raise AuthError('ACCOUNT_INACTIVE')
        return user

    # ══════════════════════════════════════════════════════════════
    # PASSWORD RESET
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def request_password_reset(cls, email) -> str | None:
        """
        Email a one-time code to a registered address.

        Unknown addresses are accepted silently so callers cannot probe
        which emails exist. Earlier unused codes for the address are
        invalidated.

        Returns:
            The plain code (for EXPOSE_DEV_OTP), or None if no user
        """
        email = _normalize_email(email)
        user = _find_user(email)
        if user is None:
            logger.info("auth.otp.unknown_email")
            return None

        length = stockmaster_settings.OTP_LENGTH
        code = ''.join(secrets.choice('0123456789') for _ in range(length))
        ttl = stockmaster_settings.OTP_TTL_MINUTES
        expires_at = timezone.now() + timedelta(minutes=ttl)

        with transaction.atomic():
            OneTimePassword.objects.usable(email).update(is_used=True)
            otp = OneTimePassword.objects.create(
                email=email,
                code_hash=make_password(code),
                purpose=OTPPurpose.PASSWORD_RESET,
                expires_at=expires_at,
            )

        send_mail(
            subject='Your password reset code',
            message=(
                f'Your password reset code is {code}.\n'
                f'It expires in {ttl} minutes.'
            ),
            from_email=stockmaster_settings.OTP_EMAIL_FROM or settings.DEFAULT_FROM_EMAIL,
            recipient_list=[email],
        )
        logger.info("auth.otp.sent", extra={"otp_id": otp.pk, "expires_at": expires_at.isoformat()})
        return code

    @classmethod
    def verify_otp(cls, email, code) -> str:
        """
        Redeem a code for a reset token.

        Raises:
            AuthError('EMAIL_REQUIRED'): No email
            AuthError('INVALID_OTP'): No usable code matches
        """
        email = _normalize_email(email)
        if not code:
            raise AuthError('INVALID_OTP')

        with transaction.atomic():
            candidates = OneTimePassword.objects.usable(email).select_for_update()
            otp = next((c for c in candidates if c.matches(str(code).strip())), None)
            if otp is None:
                logger.warning("auth.otp.rejected", extra={"email": email})
                raise AuthError('INVALID_OTP')

            otp.is_used = True
            otp.save(update_fields=['is_used'])

        logger.info("auth.otp.verified", extra={"otp_id": otp.pk})
        return signing.dumps(
            {'email': email, 'purpose': OTPPurpose.PASSWORD_RESET.value},
            salt=RESET_SALT,
        )

    @classmethod
    def reset_password(cls, reset_token, new_password):
        """
        Set a new password using a token from verify_otp().

        Raises:
            AuthError('WEAK_PASSWORD'): Below MIN_PASSWORD_LENGTH
            AuthError('INVALID_TOKEN'): Bad, expired or foreign token
        """
        if not reset_token or not isinstance(reset_token, str):
            raise AuthError('INVALID_TOKEN')
        _check_password_strength(new_password)

        try:
            payload = signing.loads(
                reset_token,
                salt=RESET_SALT,
                max_age=stockmaster_settings.RESET_TOKEN_MAX_AGE,
            )
        except signing.BadSignature:
            raise AuthError('INVALID_TOKEN') from None

        if payload.get('purpose') != OTPPurpose.PASSWORD_RESET.value:
            raise AuthError('INVALID_TOKEN')

        user = _find_user(payload.get('email', ''))
        if user is None:
            raise AuthError('INVALID_TOKEN', 'User not found')

        user.set_password(new_password)
        user.save(update_fields=['password'])
        logger.info("auth.password.reset", extra={"user_id": user.pk})
        return user
