import numpy as np
import pytest

from conftest import encode, png_header
from scanlate.errors import DecodeError
from scanlate.image.buffer import PixelBuffer
from scanlate.image.decode import compute_upscale, decode_image, encode_png, to_data_url


def test_decode_rejects_empty_bytes():
    with pytest.raises(DecodeError):
        decode_image(b"")


def test_decode_rejects_non_image_bytes():
    with pytest.raises(DecodeError):
        decode_image(b"definitely not an image" * 10)


def test_decode_rejects_truncated_png():
    data = encode(np.full((40, 40, 3), 200, dtype=np.uint8))
    with pytest.raises(DecodeError):
        decode_image(data[:60])


def test_compute_upscale_rule():
    assert compute_upscale(500, 500) == (2000, 2000, 4.0)
    w, h, scale = compute_upscale(300, 200)
    assert (w, h) == (2000, 1333)
    assert scale > 1.0
    # Already large enough on the longer side: untouched
    assert compute_upscale(2400, 10) == (2400, 10, 1.0)
    assert compute_upscale(2000, 1500) == (2000, 1500, 1.0)


def test_decode_upscales_small_images_and_keeps_original_size():
    img = np.zeros((50, 100, 3), dtype=np.uint8)
    img[:, :, 1] = 180
    buf, original = decode_image(encode(img))
    assert original == (100, 50)
    assert (buf.width, buf.height) == (2000, 1000)
    assert buf.data.size == buf.width * buf.height * 4
    assert buf.pixels.dtype == np.uint8


def test_decode_without_upscale_returns_rgba_pixels():
    img = np.zeros((4, 6, 3), dtype=np.uint8)
    img[..., 0] = 10
    img[..., 1] = 20
    img[..., 2] = 30
    buf, original = decode_image(encode(img), upscale=False)
    assert original == (6, 4)
    assert buf.pixels.shape == (4, 6, 4)
    assert (buf.pixels[..., :3] == [10, 20, 30]).all()
    assert (buf.pixels[..., 3] == 255).all()


def test_decode_grayscale_and_jpeg_inputs():
    gray = np.full((30, 30), 90, dtype=np.uint8)
    buf, _ = decode_image(encode(gray), upscale=False)
    assert buf.pixels.shape == (30, 30, 4)
    assert (buf.pixels[..., 0] == 90).all()

    jpeg = encode(np.full((30, 40, 3), 128, dtype=np.uint8), ".jpg")
    buf, original = decode_image(jpeg, upscale=False)
    assert original == (40, 30)


def test_encode_png_is_decodable_and_lossless():
    rng = np.random.default_rng(7)
    pixels = rng.integers(0, 256, size=(9, 11, 4), dtype=np.uint8)
    pixels[..., 3] = 255
    buf = PixelBuffer(pixels)
    decoded, _ = decode_image(encode_png(buf), upscale=False)
    assert np.array_equal(decoded.pixels, pixels)
    assert to_data_url(buf).startswith("data:image/png;base64,")


def test_pixel_buffer_rejects_wrong_shape():
    with pytest.raises(ValueError):
        PixelBuffer(np.zeros((4, 4, 3), dtype=np.uint8))
    with pytest.raises(ValueError):
        PixelBuffer(np.zeros((4, 4, 4), dtype=np.float32))


def test_decode_rejects_oversized_image():
    with pytest.raises(DecodeError, match="too large"):
        decode_image(png_header(30000, 30000))
