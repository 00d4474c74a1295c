"""Base64 text encoding used for the Keycloak public key field.

The public key is edited as plain text and persisted Base64-encoded. Text is
treated as UTF-8 so any string survives ``decode(encode(text))``.
"""

import base64
import binascii


def encode(text: str) -> str:
    """Encode text to its Base64 transport form."""
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def decode(encoded: str) -> str:
    """Decode a Base64 transport value back to text.

    Raises:
        ValueError: If the value is not valid Base64 or not UTF-8 text
    """
    try:
        return base64.b64decode(encoded.encode("ascii"), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeError) as e:
        raise ValueError(f"Invalid Base64 value: {e}") from e
