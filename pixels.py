import numpy as np


# Samples are 24-bit: R, G and B take one byte each.
MAX_SAMPLE = 0xFFFFFF


class PixelBuffer:
    """
    A rectangular grid of packed 24-bit RGB samples.
    Every sample is stored as `R | G << 8 | B << 16`, row-major,
        so the sample at (x, y) lives at offset y * width + x.
    """

    width: int
    height: int

    # The flat, row-major array of packed samples.
    #   Its length is always width * height.
    pixels: np.ndarray

    def __init__(self, width: int, height: int, pixels):
        if width < 1 or height < 1:
            raise ValueError(f"Invalid buffer size {width}x{height}")

        pixels = np.asarray(pixels, dtype=np.uint32).reshape(-1)
        if len(pixels) != width * height:
            raise ValueError(
                f"Expected {width * height} samples, got {len(pixels)}")
        if (pixels > MAX_SAMPLE).any():
            raise ValueError("Samples must fit in 24 bits")

        self.width = width
        self.height = height
        self.pixels = pixels

    @staticmethod
    def blank(width: int, height: int, colour: int = 0) -> "PixelBuffer":
        return PixelBuffer(width, height,
                           np.full(width * height, colour, dtype=np.uint32))

    @staticmethod
    def from_rgb_array(array: np.ndarray) -> "PixelBuffer":
        """
        Packs an H x W x 3 array of 8-bit channels into a buffer.
        """
        array = np.asarray(array)
        if array.ndim != 3 or array.shape[2] != 3:
            raise ValueError(f"Expected an HxWx3 array, got {array.shape}")

        # Widen before shifting so that G and B don't overflow.
        channels = array.astype(np.uint32)
        packed = channels[..., 0] \
            | channels[..., 1] << 8 \
            | channels[..., 2] << 16

        height, width = packed.shape
        return PixelBuffer(width, height, packed)

    def to_rgb_array(self) -> np.ndarray:
        grid = self.pixels.reshape(self.height, self.width)
        return np.stack([
            grid & 0xFF,
            (grid >> 8) & 0xFF,
            (grid >> 16) & 0xFF,
        ], axis=-1).astype(np.uint8)

    def full_region(self) -> tuple[int, int, int, int]:
        return (0, 0, self.width - 1, self.height - 1)

    def get(self, x: int, y: int) -> int:
        return int(self.pixels[y * self.width + x])

    def set(self, x: int, y: int, colour: int):
        if not 0 <= colour <= MAX_SAMPLE:
            raise ValueError(f"Sample {colour:#x} does not fit in 24 bits")

        self.pixels[y * self.width + x] = colour

    def region(self, tl_x: int, tl_y: int, br_x: int, br_y: int) -> np.ndarray:
        """
        Returns a writable 2-D view over the inclusive region
            [tl_x, br_x] x [tl_y, br_y].
        """
        grid = self.pixels.reshape(self.height, self.width)
        return grid[tl_y:br_y + 1, tl_x:br_x + 1]

    def is_uniform(self, tl_x: int, tl_y: int, br_x: int, br_y: int) -> tuple[bool, int]:
        """
        Checks whether every sample in the region equals the top-left one.
        Returns the check alongside that top-left colour.
        """
        colour = self.get(tl_x, tl_y)
        area = self.region(tl_x, tl_y, br_x, br_y)
        return bool((area == colour).all()), colour

    def fill(self, tl_x: int, tl_y: int, br_x: int, br_y: int, colour: int):
        self.region(tl_x, tl_y, br_x, br_y)[...] = colour

    def __eq__(self, other) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented

        return self.width == other.width \
            and self.height == other.height \
            and bool(np.array_equal(self.pixels, other.pixels))

    def __repr__(self) -> str:
        return f"PixelBuffer({self.width}x{self.height})"
