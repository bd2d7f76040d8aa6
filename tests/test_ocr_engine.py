import base64
import io
from unittest import mock

import pytest
from PIL import Image

from medocr.client.ocr_engine import CloudVisionEngine, TesseractEngine, guess_mime, load_image
from medocr.client.progress import ProgressChannel
from medocr.client.relay_client import RelayClient
from medocr.client.workflow import ImageRef


class RecordingChannel(ProgressChannel):
    def __init__(self):
        super().__init__()
        self.published = []

    def publish(self, fraction):
        self.published.append(fraction)
        super().publish(fraction)


def _png_bytes(size=(12, 8)):
    buf = io.BytesIO()
    Image.new("L", size, color=255).save(buf, format="PNG")
    return buf.getvalue()


class StubRelay:
    def __init__(self, text="Ibuprofen 200mg", exc=None):
        self.text = text
        self.exc = exc
        self.calls = []

    def cloud_ocr(self, image_bytes, mime="image/png"):
        self.calls.append((image_bytes, mime))
        if self.exc:
            raise self.exc
        return self.text


def test_load_image_from_bytes_and_path(tmp_path):
    data = _png_bytes()
    path = tmp_path / "rx.png"
    path.write_bytes(data)

    from_bytes = load_image(ImageRef(name="rx.png", data=data))
    from_path = load_image(ImageRef(name="rx.png", path=str(path)))
    assert from_bytes.mode == from_path.mode == "RGB"
    assert from_bytes.size == (12, 8)

    with pytest.raises(ValueError):
        load_image(ImageRef(name="empty"))


def test_tesseract_publishes_staged_progress():
    channel = RecordingChannel()
    with mock.patch("medocr.client.ocr_engine.pytesseract") as tess:
        tess.image_to_string.return_value = "Amoxicillin 500mg"
        text = TesseractEngine(lang="eng").recognize(ImageRef(name="rx.png", data=_png_bytes()), channel)

    assert text == "Amoxicillin 500mg"
    assert channel.published == [0.0, 0.25, 1.0]
    assert channel.closed

    pil = tess.image_to_string.call_args.args[0]
    assert isinstance(pil, Image.Image) and pil.mode == "RGB"
    assert tess.image_to_string.call_args.kwargs == {"lang": "eng", "config": "--psm 3"}


def test_tesseract_failure_closes_channel():
    channel = RecordingChannel()
    with mock.patch("medocr.client.ocr_engine.pytesseract") as tess:
        tess.image_to_string.side_effect = RuntimeError("tesseract is not installed")
        with pytest.raises(RuntimeError, match="not installed"):
            TesseractEngine().recognize(ImageRef(name="rx.png", data=_png_bytes()), channel)

    assert channel.published == [0.0, 0.25]
    assert channel.closed
    assert list(channel) == [0.25]


def test_tesseract_unreadable_image_closes_channel():
    channel = RecordingChannel()
    with mock.patch("medocr.client.ocr_engine.pytesseract") as tess:
        with pytest.raises(Exception):
            TesseractEngine().recognize(ImageRef(name="rx.png", data=b"not an image"), channel)
        tess.image_to_string.assert_not_called()

    assert channel.published == [0.0]
    assert channel.closed


def test_cancelled_run_skips_recognition():
    channel = RecordingChannel()
    channel.cancel()
    with mock.patch("medocr.client.ocr_engine.pytesseract") as tess:
        with pytest.raises(Exception, match="cancelled"):
            TesseractEngine().recognize(ImageRef(name="rx.png", data=_png_bytes()), channel)
        tess.image_to_string.assert_not_called()


def test_cloud_engine_sends_bytes_with_mime():
    relay = StubRelay()
    channel = RecordingChannel()
    text = CloudVisionEngine(relay).recognize(ImageRef(name="scan.JPG", data=b"jpeg-bytes"), channel)

    assert text == "Ibuprofen 200mg"
    assert relay.calls == [(b"jpeg-bytes", "image/jpeg")]
    assert channel.published == [0.0, 0.25, 1.0]
    assert channel.closed


def test_cloud_engine_reads_path_only_image(tmp_path):
    path = tmp_path / "rx.png"
    path.write_bytes(b"png-from-disk")
    relay = StubRelay()

    CloudVisionEngine(relay).recognize(ImageRef(name="rx.png", path=str(path)), RecordingChannel())
    assert relay.calls == [(b"png-from-disk", "image/png")]


def test_cloud_engine_failure_closes_channel():
    channel = RecordingChannel()
    engine = CloudVisionEngine(StubRelay(exc=RuntimeError("Cloud Vision OCR failed")))
    with pytest.raises(RuntimeError):
        engine.recognize(ImageRef(name="rx.png", data=b"x"), channel)
    assert channel.closed


def test_cloud_engine_through_relay_client():
    resp = mock.Mock(status_code=200, ok=True)
    resp.json.return_value = {"text": "Lisinopril"}
    http = mock.Mock()
    http.post.return_value = resp
    relay = RelayClient("http://relay.test", timeout=5, session=http)

    text = CloudVisionEngine(relay).recognize(ImageRef(name="rx.tiff", data=b"tif"), RecordingChannel())

    assert text == "Lisinopril"
    url = http.post.call_args.args[0]
    payload = http.post.call_args.kwargs["json"]
    assert url == "http://relay.test/api/ocr/cloud-vision"
    assert payload == {"image": "data:image/tiff;base64," + base64.b64encode(b"tif").decode()}


@pytest.mark.parametrize(
    "name,expected",
    [
        ("rx.jpg", "image/jpeg"),
        ("rx.JPEG", "image/jpeg"),
        ("rx.tif", "image/tiff"),
        ("rx.png", "image/png"),
        ("rx.webp", "image/webp"),
        ("rx.pdf", "application/octet-stream"),
        ("noext", "application/octet-stream"),
    ],
)
def test_guess_mime(name, expected):
    assert guess_mime(name) == expected
