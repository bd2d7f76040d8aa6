import base64
from types import SimpleNamespace

from medocr.services.google_vision import (
    CloudVisionOcr,
    decode_base64_image,
    first_annotation_text,
)
from tests.conftest import StubCloudOcr

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image-bytes"
B64 = base64.b64encode(PNG_BYTES).decode()


class FakeVisionClient:
    def __init__(self, annotations=(), error_message=""):
        self.annotations = list(annotations)
        self.error_message = error_message
        self.calls = 0

    def text_detection(self, image):
        self.calls += 1
        return SimpleNamespace(
            error=SimpleNamespace(message=self.error_message),
            text_annotations=self.annotations,
        )


def test_route_absent_unless_enabled(make_client):
    client = make_client(ENABLE_CLOUD_VISION=False)
    r = client.post("/api/ocr/cloud-vision", json={"image": B64})
    assert r.status_code == 404


def test_missing_image_is_400(make_client):
    client = make_client(cloud_ocr=StubCloudOcr(), ENABLE_CLOUD_VISION=True)
    for body in ({}, {"image": ""}, {"image": "  "}):
        r = client.post("/api/ocr/cloud-vision", json=body)
        assert r.status_code == 400
        assert r.json() == {"error": "Missing image (base64)"}


def test_data_url_prefix_decodes_like_plain_payload(make_client):
    stub = StubCloudOcr()
    client = make_client(cloud_ocr=stub, ENABLE_CLOUD_VISION=True)
    r1 = client.post("/api/ocr/cloud-vision", json={"image": B64})
    r2 = client.post("/api/ocr/cloud-vision", json={"image": "data:image/png;base64," + B64})
    assert r1.status_code == r2.status_code == 200
    assert stub.seen == [PNG_BYTES, PNG_BYTES]
    assert r1.json() == {"text": "Amoxicillin 500mg"}


def test_decode_base64_image():
    assert decode_base64_image(B64) == PNG_BYTES
    assert decode_base64_image("data:image/jpeg;base64," + B64) == PNG_BYTES


def test_zero_annotations_gives_placeholder(make_client):
    ocr = CloudVisionOcr(client=FakeVisionClient())
    client = make_client(cloud_ocr=ocr, ENABLE_CLOUD_VISION=True)
    r = client.post("/api/ocr/cloud-vision", json={"image": B64})
    assert r.status_code == 200
    assert r.json() == {"text": "(No text detected)"}


def test_first_annotation_is_used_and_trimmed():
    resp = SimpleNamespace(
        text_annotations=[
            SimpleNamespace(description="  Ibuprofen 200mg\nTake with food \n"),
            SimpleNamespace(description="Ibuprofen"),
        ]
    )
    assert first_annotation_text(resp) == "Ibuprofen 200mg\nTake with food"


def test_vision_error_is_500(make_client):
    ocr = CloudVisionOcr(client=FakeVisionClient(error_message="PERMISSION_DENIED"))
    client = make_client(cloud_ocr=ocr, ENABLE_CLOUD_VISION=True)
    r = client.post("/api/ocr/cloud-vision", json={"image": B64})
    assert r.status_code == 500
    assert r.json() == {"error": "Cloud Vision OCR failed", "details": "PERMISSION_DENIED"}


def test_stub_failure_is_500(make_client):
    stub = StubCloudOcr(exc=RuntimeError("network down"))
    client = make_client(cloud_ocr=stub, ENABLE_CLOUD_VISION=True)
    r = client.post("/api/ocr/cloud-vision", json={"image": B64})
    assert r.status_code == 500
    assert r.json()["error"] == "Cloud Vision OCR failed"
    assert r.json()["details"] == "network down"


def test_data_url_with_parameters_is_stripped():
    assert decode_base64_image("data:image/png;name=rx.png;base64," + B64) == PNG_BYTES
    assert decode_base64_image("DATA:image/png;charset=binary;base64," + B64) == PNG_BYTES
