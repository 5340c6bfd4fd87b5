#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import io
import unittest

from PIL import Image

from textpix.container import LENGTH_KEY, PixelContainer
from textpix.errors import ContainerError
from textpix.pipeline import decode_payload, encode_payload


class PixelContainerTests(unittest.TestCase):
    def test_rgba_roundtrip_with_padding(self) -> None:
        payload = bytes(range(1, 11))
        box = PixelContainer("RGBA")
        png = box.write(payload)
        self.assertTrue(png.startswith(b"\x89PNG"))
        raw = box.read(png)
        self.assertEqual(len(raw), 2 * 2 * 4)
        self.assertEqual(raw, payload + b"\x00" * 6)
        self.assertEqual(box.read_payload(png), payload)

    def test_image_dimensions_follow_plan(self) -> None:
        payload = b"x" * 100
        png = PixelContainer().write(payload)
        img = Image.open(io.BytesIO(png))
        self.assertEqual(img.size, (5, 5))
        self.assertEqual(img.mode, "RGBA")
        self.assertEqual(img.info.get(LENGTH_KEY), "100")

    def test_other_modes_roundtrip(self) -> None:
        payload = bytes(range(256)) + b"\x00\x00tail"
        for mode in ("RGB", "L"):
            with self.subTest(mode=mode):
                box = PixelContainer(mode)
                self.assertEqual(box.read_payload(box.write(payload)), payload)

    def test_trailing_zero_bytes_survive_with_length_chunk(self) -> None:
        payload = b"\x00\x00\x00\x01\x00\x00"
        box = PixelContainer()
        self.assertEqual(box.read_payload(box.write(payload)), payload)

    def test_empty_buffer(self) -> None:
        box = PixelContainer()
        png = box.write(b"")
        self.assertEqual(box.read(png), b"\x00" * 4)
        self.assertEqual(box.read_payload(png), b"")

    def _png_without_length_chunk(self, raw: bytes, mode: str = "RGBA") -> bytes:
        box = PixelContainer(mode)
        dims = box.plan(len(raw))
        padded = raw + b"\x00" * (dims.cells * box.bytes_per_cell - len(raw))
        out = io.BytesIO()
        Image.frombytes(mode, (dims.width, dims.height), padded).save(out, format="PNG")
        return out.getvalue()

    def test_png_without_length_chunk_is_refused(self) -> None:
        png = self._png_without_length_chunk(b"abcdef")
        with self.assertRaises(ContainerError):
            PixelContainer().read_payload(png)
        self.assertEqual(PixelContainer().read(png), b"abcdef\x00\x00")

    def test_payload_ending_in_zero_bytes(self) -> None:
        payload, _dict_bytes, _entries = encode_payload("abc\x00\x00\x00")
        self.assertEqual(payload[-1:], b"\x00")
        box = PixelContainer()
        self.assertEqual(decode_payload(box.read_payload(box.write(payload))), "abc\x00\x00\x00")
        with self.assertRaises(ContainerError):
            box.read_payload(self._png_without_length_chunk(payload))

    def test_mode_mismatch(self) -> None:
        png = PixelContainer("RGB").write(b"hello")
        with self.assertRaises(ContainerError):
            PixelContainer("RGBA").read(png)

    def test_read_uses_image_mode_when_none_given(self) -> None:
        payload = b"hello\x00"
        for mode in ("RGB", "L"):
            with self.subTest(mode=mode):
                png = PixelContainer(mode).write(payload)
                self.assertEqual(PixelContainer().read_payload(png), payload)

    def test_unsupported_image_mode(self) -> None:
        out = io.BytesIO()
        Image.new("LA", (1, 1)).save(out, format="PNG")
        with self.assertRaises(ContainerError):
            PixelContainer().read(out.getvalue())

    def test_garbage_handle(self) -> None:
        with self.assertRaises(ContainerError):
            PixelContainer().read(b"not an image")

    def test_unsupported_mode(self) -> None:
        with self.assertRaises(ContainerError):
            PixelContainer("CMYK")


if __name__ == "__main__":
    unittest.main()
