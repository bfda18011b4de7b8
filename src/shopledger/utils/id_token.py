"""Read the user profile carried in a Google sign-in credential."""

import base64
import binascii
import json

from shopledger.domain.entities import UserProfile


def profile_from_id_token(credential: str) -> UserProfile:
    """Decode the payload segment of an ID token into a UserProfile.

    Only the claims are read; the signature is not verified. Obtaining the
    credential is left to the sign-in provider.

    Args:
        credential: JWT string ("header.payload.signature")

    Returns:
        UserProfile built from the name, email and picture claims

    Raises:
        ValueError: If the credential is not a decodable JWT
    """
    parts = credential.strip().split(".")
    if len(parts) != 3:
        raise ValueError("Credential is not a JWT (expected three dot-separated parts)")

    payload = parts[1] + "=" * (-len(parts[1]) % 4)
    try:
        claims = json.loads(base64.urlsafe_b64decode(payload))
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Could not decode credential payload: {e}")
    if not isinstance(claims, dict):
        raise ValueError("Credential payload is not a JSON object")

    return UserProfile(
        name=str(claims.get("name", "")),
        email=str(claims.get("email", "")),
        picture=str(claims.get("picture", "")),
    )
