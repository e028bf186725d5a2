"""
Production settings for RosterDesk.
TLS is terminated at the edge proxy; the app is served over plain HTTP behind it.
"""

from .base import *  # noqa: F401, F403

DEBUG = False

SECRET_KEY = env("SECRET_KEY")  # noqa: F405

# Trust the X-Forwarded-Proto header injected by the proxy; it already
# redirects HTTP to HTTPS.
SECURE_SSL_REDIRECT = False
SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")

# Cookie security (admin sessions only)
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True

# HSTS: instruct browsers to only use HTTPS for this domain
SECURE_HSTS_SECONDS = 31536000
SECURE_HSTS_INCLUDE_SUBDOMAINS = True
SECURE_HSTS_PRELOAD = True

ALLOWED_HOSTS = env.list(  # noqa: F405
    "ALLOWED_HOSTS",
    default=["localhost"],
)

CSRF_TRUSTED_ORIGINS = env.list(  # noqa: F405
    "CSRF_TRUSTED_ORIGINS",
    default=[],
)

EMAIL_BACKEND = env(  # noqa: F405
    "EMAIL_BACKEND",
    default="django.core.mail.backends.smtp.EmailBackend",
)
EMAIL_HOST = env("EMAIL_HOST", default="localhost")  # noqa: F405
EMAIL_PORT = env.int("EMAIL_PORT", default=25)  # noqa: F405

# Bounded wait on the slot row lock; a timeout surfaces as TransactionFailure.
DATABASES["default"].setdefault("OPTIONS", {})  # noqa: F405
DATABASES["default"]["OPTIONS"]["options"] = "-c lock_timeout=5000"  # noqa: F405

LOGGING["root"]["level"] = "INFO"  # noqa: F405
