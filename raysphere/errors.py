"""Exception types raised by raysphere."""


class RayTracerError(Exception):
    """Base class for raysphere errors."""
    pass


class OutsideImageBufferError(RayTracerError, IndexError):
    """Pixel coordinate outside the image buffer."""

    def __init__(self, x: int, y: int, width: int, height: int):
        super().__init__(
            f"Pixel ({x}, {y}) is outside the {width}x{height} image buffer"
        )
        self.x = x
        self.y = y
