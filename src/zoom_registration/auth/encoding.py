import base64
from typing import Any, Dict


def _base64_encode(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("utf-8")


def encode_auth(auth_type: str, **kwargs: Any) -> Dict[str, str]:
    """
    Encodes credentials into an Authorization header.

    Args:
        auth_type: 'basic' (client credentials exchange) or 'bearer'
            (registration calls with an access token).
        **kwargs: username and password for basic, token for bearer.

    Returns:
        A dictionary containing the HTTP header.
    """
    auth_type = auth_type.lower()

    if auth_type == "basic":
        # RFC 7617: base64(username:password)
        username = kwargs.get("username")
        password = kwargs.get("password")
        if not username or not password:
            raise ValueError("Basic auth requires username and password")
        return {"Authorization": f"Basic {_base64_encode(f'{username}:{password}')}"}

    if auth_type in ("bearer", "bearer_oauth"):
        token = kwargs.get("token")
        if not token:
            raise ValueError(f"{auth_type} requires token")
        return {"Authorization": f"Bearer {token}"}

    if auth_type == "none":
        return {}

    raise ValueError(f"Unsupported auth type: {auth_type}")


def encode_client_credentials(client_id: str, client_secret: str) -> Dict[str, str]:
    """Basic header for an OAuth client-credentials exchange."""
    return encode_auth("basic", username=client_id, password=client_secret)
