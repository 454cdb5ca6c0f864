"""Settings for the pytest run.

Supplies a throwaway ``SECRET_KEY`` and unthrottled rates; everything else,
including ``DATABASE_URL``, comes from the regular settings module.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-only-insecure-secret-key")

from config.settings import *  # noqa: E402,F401,F403
from config.settings import REST_FRAMEWORK  # noqa: E402

REST_FRAMEWORK = {
    **REST_FRAMEWORK,
    "DEFAULT_THROTTLE_RATES": {
        "anon": "100000/minute",
        "user": "100000/minute",
        "purchase": "100000/minute",
        "listing": "100000/minute",
    },
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]
