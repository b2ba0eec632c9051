from .geogrid import (
    WORD_SIZES,
    build_dtype,
    decode_word,
    decode_buffer,
    decode_geogrid,
    decode_geogrid_to_dataarray,
    output_dims,
)

__all__ = [
    "WORD_SIZES",
    "build_dtype",
    "decode_word",
    "decode_buffer",
    "decode_geogrid",
    "decode_geogrid_to_dataarray",
    "output_dims",
]
