"""JSON encoding for stored documents.

Documents come back from MongoDB with BSON types that are not JSON native.
They are converted here, before FastAPI validates the response model:

- ``ObjectId`` references become their 24-character hex string
- ``Decimal128`` becomes its decimal string, keeping full precision
- binary payloads become base64 text
- datetimes become ISO 8601 strings (FastAPI's default)
"""

import base64
from typing import Any

from bson import Decimal128, ObjectId
from bson.binary import Binary
from fastapi.encoders import jsonable_encoder


def _encode_binary(value: bytes) -> str:
    return base64.b64encode(bytes(value)).decode("ascii")


BSON_ENCODERS: dict[type, Any] = {
    ObjectId: str,
    Decimal128: str,
    Binary: _encode_binary,
    bytes: _encode_binary,
}


def encode_documents(payload: Any) -> Any:
    """Return ``payload`` with every nested BSON value made JSON safe."""
    return jsonable_encoder(payload, custom_encoder=BSON_ENCODERS)
