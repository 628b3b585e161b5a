"""
Envelope Cipher

Authenticated encryption of single in-memory values with AES-256-GCM, keyed
from a ``base64:``-prefixed application key.

Quick Start
-----------
```python
from envelope_cipher import EnvelopeCipher, Settings, generate_key

cipher = EnvelopeCipher(Settings(app_key=generate_key()))

token = cipher.encrypt_string("hello")
assert cipher.decrypt_string(token) == "hello"

token = cipher.encrypt_value({"user_id": 42, "roles": ["admin"]})
assert cipher.decrypt_value(token) == {"user_id": 42, "roles": ["admin"]}
```

Or key from the environment (``APP_KEY``, optionally via ``.env``):

```python
from envelope_cipher import decrypt, encrypt

token = encrypt({"user_id": 42})
value = decrypt(token)
```

Envelope Format
---------------
``base64(json({"iv": base64(nonce), "tag": base64(tag), "value": base64(ciphertext)}))``

Errors
------
- `ConfigurationError`: application key missing, malformed or wrong size
- `EncodingError`: envelope is not base64/JSON or lacks a field
- `ValidationError`: nonce or tag has the wrong length
- `CryptoError`: authentication failed (tampering or wrong key)
- `SerializationError`: value could not be (de)serialized

Modules
-------
- `cipher`: EnvelopeCipher service
- `envelope`: Wire format
- `crypto`: AES-256-GCM primitives
- `keys`: Application key resolution and generation
- `serializers`: Value codecs
- `config`: Settings
- `errors`: Error types and exception classes
"""

__version__ = "0.1.0"

# ============================================================================
# Crypto Exports
# ============================================================================

from .crypto import (
    AES_256_KEY_SIZE,
    CIPHER,
    NONCE_SIZE,
    TAG_SIZE,
    AesGcmCipher,
    SealedData,
    SecureKey,
    generate_random_bytes,
    random_byte_string,
)

# ============================================================================
# Error Exports
# ============================================================================

from .errors import (
    ConfigurationError,
    CryptoError,
    EncodingError,
    EnvelopeError,
    SerializationError,
    ValidationError,
)

# ============================================================================
# Configuration and Key Exports
# ============================================================================

from .config import Settings
from .keys import KEY_PREFIX, KeyResolver, generate_key, resolve_key

# ============================================================================
# Envelope Exports (Primary API)
# ============================================================================

from .serializers import Codec, JsonCodec, PickleCodec
from .envelope import Envelope
from .cipher import EnvelopeCipher
from .helpers import decrypt, encrypt

# ============================================================================
# Public API
# ============================================================================

__all__ = [
    # Version
    "__version__",
    # Crypto
    "AES_256_KEY_SIZE",
    "CIPHER",
    "NONCE_SIZE",
    "TAG_SIZE",
    "AesGcmCipher",
    "SealedData",
    "SecureKey",
    "generate_random_bytes",
    "random_byte_string",
    # Errors
    "EnvelopeError",
    "ConfigurationError",
    "EncodingError",
    "ValidationError",
    "CryptoError",
    "SerializationError",
    # Configuration and keys
    "Settings",
    "KEY_PREFIX",
    "KeyResolver",
    "generate_key",
    "resolve_key",
    # Envelope (Primary API)
    "Codec",
    "JsonCodec",
    "PickleCodec",
    "Envelope",
    "EnvelopeCipher",
    "encrypt",
    "decrypt",
]
