import struct

from PIL import Image
import numpy as np

from pixels import PixelBuffer


# Every sample is stored on disk as 3 bytes: B, G, R.
BYTES_PER_PIXEL = 3

# Where the info header keeps the bit depth.
BITS_PER_PIXEL_OFFSET = 0x1C


def read_bits_per_pixel(path) -> int:
    with open(path, "rb") as file:
        file.seek(BITS_PER_PIXEL_OFFSET)
        (bits_per_pixel,) = struct.unpack("<H", file.read(2))

    return bits_per_pixel


def decode(path) -> tuple[int, int, int, PixelBuffer]:
    """
    Reads a bitmap file into a PixelBuffer.
    Returns (width, height, bytes per pixel, buffer).

    Pillow takes care of the row padding and of bottom-up row order,
        so the buffer is always unpadded and top-down.
    Raises OSError if the file cannot be opened or is not an image,
        and ValueError if it is not a 24-bit bitmap.
    """
    with Image.open(path) as image:
        if image.format != "BMP":
            raise ValueError(f"{path} is a {image.format} image, not a bitmap")

        # 24-bit is the only depth we work with.
        bits_per_pixel = read_bits_per_pixel(path)
        if bits_per_pixel != BYTES_PER_PIXEL * 8:
            raise ValueError(f"{path} is a {bits_per_pixel}-bit bitmap, not 24-bit")

        image_array = np.array(image.convert("RGB"))

    buffer = PixelBuffer.from_rgb_array(image_array)

    return buffer.width, buffer.height, bits_per_pixel // 8, buffer


def encode(path, buffer: PixelBuffer, width: int, height: int,
           bytes_per_pixel: int = BYTES_PER_PIXEL):
    """
    Writes the buffer as an uncompressed 24-bit bitmap
        (one colour plane, no colour table).
    """
    if (width, height) != (buffer.width, buffer.height):
        raise ValueError(
            f"Buffer is {buffer.width}x{buffer.height}, not {width}x{height}")
    if bytes_per_pixel != BYTES_PER_PIXEL:
        raise ValueError(f"Unsupported bytes per pixel: {bytes_per_pixel}")

    image = Image.fromarray(buffer.to_rgb_array())
    image.save(path, format="BMP")
