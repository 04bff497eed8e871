from .baudot import BaudotCodec, CodecState, decode, encode_char
from .symbols import BAUDOT_BITS, BITS_PER_SYMBOL, symbol_bits

__all__ = [
    "BAUDOT_BITS",
    "BITS_PER_SYMBOL",
    "BaudotCodec",
    "CodecState",
    "decode",
    "encode_char",
    "symbol_bits",
]
