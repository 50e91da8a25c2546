# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
PJLink class 1 authentication.

When the projector requires authentication, its greeting carries a random salt:

    PJLINK 1 <salt>\\r

The client computes MD5(<salt> + <password>), and prefixes the 32-character lowercase
hex digest to every command line it sends:

    <digest>%1POWR 1\\r

If the digest is wrong, the projector answers with b'PJLINK ERRA\\r'.
"""

from __future__ import annotations

import hashlib

from ..internal_types import *
from ..exceptions import AuthRequiredError, HashComputationFailedError
from ..pkg_logging import logger
from .constants import DIGEST_LENGTH

def compute_digest(salt: Union[str, bytes], secret: Union[str, bytes]) -> str:
    """Returns the lowercase hex MD5 digest of salt followed by secret.

    raises HashComputationFailedError if the digest cannot be computed.
    """
    try:
        salt_bytes = salt.encode('utf-8') if isinstance(salt, str) else bytes(salt)
        secret_bytes = secret.encode('utf-8') if isinstance(secret, str) else bytes(secret)
        result = hashlib.md5(salt_bytes + secret_bytes).hexdigest()
    except Exception as e:
        raise HashComputationFailedError(f"Unable to compute authentication digest: {e}") from e
    if len(result) != DIGEST_LENGTH:
        raise HashComputationFailedError(f"Authentication digest has unexpected length {len(result)}")
    return result

class Authenticator:
    """Holds the configured password and, once a challenge has been received,
       the digest that must accompany every outgoing command."""
    secret: Optional[str]
    digest: Optional[str] = None

    def __init__(self, secret: Optional[str]=None):
        self.secret = None if secret == '' else secret

    @property
    def has_secret(self) -> bool:
        return self.secret is not None

    @property
    def is_active(self) -> bool:
        """True iff outgoing commands must be prefixed with the digest"""
        return self.digest is not None

    def challenge(self, salt: Union[str, bytes]) -> str:
        """Computes and retains the digest for a salt received in the greeting.

        raises AuthRequiredError if no password is configured.
        """
        if self.secret is None:
            raise AuthRequiredError("Projector requires authentication, but no password is configured")
        self.digest = compute_digest(salt, self.secret)
        logger.debug("Authentication digest computed; prefixing all commands")
        return self.digest

    def sign(self, wire_text: bytes) -> bytes:
        """Returns the bytes to send for a command: the digest, if any, followed by the command"""
        if self.digest is None:
            return wire_text
        return self.digest.encode('ascii') + wire_text

    def __str__(self) -> str:
        return f"Authenticator(has_secret={self.has_secret}, active={self.is_active})"

    def __repr__(self) -> str:
        return str(self)
