import asyncio
import os
import tempfile
import unittest

import httpx

from mealbook.infra.Image_Storage import (
    HttpImageStorage, ImageUploadError, ImageValidationError, LocalImageStorage,
    build_image_storage, validate_image,
)
from mealbook.infra.tickers import AsyncioTicker
from mealbook.utilities.constants import MAX_IMAGE_SIZE


class TestValidateImage(unittest.TestCase):

    def test_allowed_types(self):
        self.assertEqual(validate_image("image/jpeg", 10), "jpg")
        self.assertEqual(validate_image("image/PNG", 10), "png")
        self.assertEqual(validate_image("image/webp", MAX_IMAGE_SIZE), "webp")

    def test_too_large(self):
        with self.assertRaises(ImageValidationError) as ctx:
            validate_image("image/png", MAX_IMAGE_SIZE + 1)
        self.assertEqual(str(ctx.exception), "Image size must be less than 5MB")

    def test_wrong_type(self):
        for content_type in ("image/gif", "application/pdf", None):
            with self.assertRaises(ImageValidationError) as ctx:
                validate_image(content_type, 10)
            self.assertEqual(str(ctx.exception), "Only JPG, PNG, and WEBP images are allowed")


class TestLocalImageStorage(unittest.TestCase):

    def test_upload_writes_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            storage = LocalImageStorage(root=tmp, url_prefix="/static/pictures/")
            url = asyncio.run(storage.upload("recipes", b"\x89PNG data", "Photo.PNG"))
            self.assertTrue(url.startswith("/static/pictures/recipes/"))
            self.assertTrue(url.endswith(".png"))
            stored = os.path.join(tmp, url[len("/static/pictures/"):])
            with open(stored, "rb") as f:
                self.assertEqual(f.read(), b"\x89PNG data")


class TestHttpImageStorage(unittest.TestCase):

    BASE = "https://storage.example.test/storage/v1"

    def _upload(self, handler, filename="a.png", token="secret"):
        async def run():
            async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
                storage = HttpImageStorage(self.BASE, "recipe-images", token=token, client=client)
                return await storage.upload("recipes", b"jpeg bytes", filename)
        return asyncio.run(run())

    def test_upload_returns_public_url(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"Key": "recipe-images/recipes/1.jpg"})

        url = self._upload(handler, "dinner.jpg")
        self.assertTrue(url.startswith(f"{self.BASE}/object/public/recipe-images/recipes/"))
        self.assertTrue(url.endswith(".jpg"))

        request = seen[0]
        self.assertEqual(request.method, "POST")
        self.assertTrue(str(request.url).startswith(f"{self.BASE}/object/recipe-images/recipes/"))
        self.assertEqual(request.headers["Authorization"], "Bearer secret")
        self.assertEqual(request.headers["Content-Type"], "image/jpeg")
        self.assertEqual(request.content, b"jpeg bytes")

    def test_no_token_no_auth_header(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200)

        self._upload(handler, "a.webp", token="")
        self.assertNotIn("Authorization", seen[0].headers)

    def test_rejected_upload(self):
        with self.assertRaises(ImageUploadError) as ctx:
            self._upload(lambda request: httpx.Response(400, text="Bucket not found"))
        self.assertEqual(str(ctx.exception), "Bucket not found")

    def test_transport_failure(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with self.assertRaises(ImageUploadError):
            self._upload(handler)

    def test_slow_upload_keeps_timers_ticking(self):
        ticks = []

        async def slow(request):
            await asyncio.sleep(0.5)
            return httpx.Response(200)

        async def run():
            handle = AsyncioTicker(0.05).schedule(lambda: ticks.append(1))
            async with httpx.AsyncClient(transport=httpx.MockTransport(slow)) as client:
                storage = HttpImageStorage(self.BASE, "recipe-images", client=client)
                await storage.upload("recipes", b"x", "a.png")
            handle.cancel()

        asyncio.run(run())
        self.assertGreaterEqual(len(ticks), 5)


class TestBuildImageStorage(unittest.TestCase):

    def test_local_without_url(self):
        self.assertIsInstance(build_image_storage(""), LocalImageStorage)

    def test_http_with_url(self):
        storage = build_image_storage("https://storage.example.test/", "pics", token="t")
        self.assertIsInstance(storage, HttpImageStorage)
        self.assertEqual(storage.public_url("a/b.png"), "https://storage.example.test/object/public/pics/a/b.png")


if __name__ == '__main__':
    unittest.main()
