"""
Decoder Factory

Factory for creating coordinate decoder instances.
"""

import importlib
from typing import Dict, List, Type, Union

from .base import CoordinateDecoder


# Registry of available decoders ("module.Class" paths load lazily)
_DECODER_REGISTRY: Dict[str, Union[str, Type[CoordinateDecoder]]] = {
    "glyph_column": "column_decoder.GlyphColumnDecoder",
}

# Cache for loaded decoder classes
_DECODER_CACHE: Dict[str, Type[CoordinateDecoder]] = {}


def _load_decoder_class(decoder_type: str) -> Type[CoordinateDecoder]:
    """Lazily load a decoder class by type."""
    if decoder_type in _DECODER_CACHE:
        return _DECODER_CACHE[decoder_type]

    entry = _DECODER_REGISTRY[decoder_type]
    if isinstance(entry, str):
        module_name, class_name = entry.rsplit(".", 1)
        module = importlib.import_module(f".{module_name}", package=__package__)
        decoder_class = getattr(module, class_name)
    else:
        decoder_class = entry

    _DECODER_CACHE[decoder_type] = decoder_class
    return decoder_class


def create_decoder(decoder_type: str = "glyph_column", **config) -> CoordinateDecoder:
    """
    Create a decoder by type.

    Args:
        decoder_type: Decoder type identifier. Available types:
            - "glyph_column" (default): pixel-exact bitmap column decoder
        **config: Decoder-specific options passed to configure():
            For "glyph_column":
                - label_offset: Unscaled label-to-digits offset
                - lit_color: ARGB text color

    Returns:
        Configured CoordinateDecoder instance

    Raises:
        ValueError: If decoder_type is not recognized

    Example:
        decoder = create_decoder()
        result = decoder.decode(buffer)
        if result.found:
            print(result.coordinate)
    """
    if decoder_type not in _DECODER_REGISTRY:
        available = ", ".join(_DECODER_REGISTRY.keys())
        raise ValueError(f"Unknown decoder type: {decoder_type}. Available: {available}")

    decoder = _load_decoder_class(decoder_type)()
    if config:
        decoder.configure(**config)
    return decoder


def register_decoder(name: str, decoder_class: type) -> None:
    """
    Register a custom decoder type.

    Args:
        name: Decoder type identifier
        decoder_class: CoordinateDecoder subclass

    Raises:
        TypeError: If decoder_class is not a CoordinateDecoder subclass
    """
    if not (isinstance(decoder_class, type) and issubclass(decoder_class, CoordinateDecoder)):
        raise TypeError(f"{decoder_class} must be a subclass of CoordinateDecoder")
    _DECODER_REGISTRY[name] = decoder_class
    _DECODER_CACHE.pop(name, None)


def available_decoders() -> List[str]:
    """
    List available decoder types.

    Returns:
        List of registered decoder type names
    """
    return list(_DECODER_REGISTRY.keys())
