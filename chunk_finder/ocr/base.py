"""
Decoder Base Interface

Abstract base class defining the coordinate decoder contract.
"""

from abc import ABC, abstractmethod

from .buffer import PixelBuffer
from .result import DecodeResult


class CoordinateDecoder(ABC):
    """
    Abstract base class for coordinate decoders.

    All decoders must inherit from this class and implement decode() to
    read a coordinate triple from a captured window buffer.
    """

    @abstractmethod
    def decode(self, buffer: PixelBuffer) -> DecodeResult:
        """
        Decode the coordinate label shown in a buffer.

        Implementations must not raise for unexpected pixel content and
        must not keep a reference to the buffer after returning.

        Args:
            buffer: ARGB view of the captured window

        Returns:
            Found with the coordinate triple, or NotFound
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Decoder identifier.

        Returns:
            String name identifying this decoder type (e.g., "glyph_column")
        """
        pass

    def configure(self, **kwargs) -> None:
        """
        Configure decoder parameters.

        Override in subclasses to support runtime configuration.
        Default implementation does nothing.

        Args:
            **kwargs: Decoder-specific configuration options
        """
        pass
