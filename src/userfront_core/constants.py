"""
Constants shared across the client.
"""

import re

API_URL = "https://api.userfront.com/v0/"

PRIVATE_IP_REGEX = re.compile(
    r"((^127\.)|(^10\.)|(^172\.1[6-9]\.)|(^172\.2[0-9]\.)|(^172\.3[0-1]\.)|(^192\.168\.))\d{1,3}\.\d{1,3}"
)

# PKCE challenge cache (local storage)
PKCE_CODE_CHALLENGE_KEY = "uf_pkce_code_challenge"
PKCE_CODE_CHALLENGE_EXPIRES_AT_KEY = "uf_pkce_code_challenge_expiresAt"
PKCE_TTL_SECONDS = 5 * 60

SSO_PROVIDERS = (
    "apple",
    "azure",
    "facebook",
    "github",
    "google",
    "linkedin",
    "okta",
)
