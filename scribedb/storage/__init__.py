from .codec import Serializable, decode, encode
from .errors import EncodingFailure, InvalidArgument, IOFailure, NotFound, StoreError
from .json_store import JsonStore, Options, open_store

__all__ = [
    "JsonStore",
    "Options",
    "open_store",
    "Serializable",
    "encode",
    "decode",
    "StoreError",
    "InvalidArgument",
    "NotFound",
    "IOFailure",
    "EncodingFailure",
]
