"""Binary encoding of parts for storage handles."""

import pickle
from typing import BinaryIO

from count_queries.partition.types import Part

# Errors pickle raises on damaged input, besides UnpicklingError itself.
_DECODE_ERRORS = (
    pickle.UnpicklingError,
    EOFError,
    AttributeError,
    ImportError,
    IndexError,
    KeyError,
    TypeError,
    ValueError,
)


def serialize_part(part: Part, sink: BinaryIO) -> None:
    """Write one part to the sink."""
    pickle.dump(part, sink, protocol=pickle.HIGHEST_PROTOCOL)


def deserialize_part(source: BinaryIO) -> Part:
    """
    Read one part from the source.

    Raises ValueError if the payload is truncated, malformed, or does not
    decode to a mapping of str -> int.
    """
    try:
        part = pickle.load(source)
    except _DECODE_ERRORS as exc:
        raise ValueError(f"malformed part payload: {exc!r}") from exc

    if not isinstance(part, dict):
        raise ValueError(f"part payload is {type(part).__name__}, expected dict")
    for key, count in part.items():
        if not isinstance(key, str) or type(count) is not int:
            raise ValueError(f"part entry {key!r}: {count!r} is not a str -> int pair")
    return part
