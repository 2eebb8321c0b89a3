"""Decoding of raw ANSI byte streams."""

from ansigrid.codec.cp437 import cp437_to_unicode
from ansigrid.codec.decoder import Decoder, ParserState
from ansigrid.codec.params import ParameterAccumulator
from ansigrid.codec.sgr import apply_sgr

__all__ = ["cp437_to_unicode", "Decoder", "ParserState", "ParameterAccumulator", "apply_sgr"]
