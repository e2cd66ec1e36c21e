# blog_app/api/settings/test_qr_settings_services.py
import base64

import pytest

from blog_app.core.errors import MissingFieldsError, MediaDecodeError
from blog_app.services.kv_store import QR_PATH_KEY


def _qr_paths(services):
    return [p for p in services['object_store'].paths() if p.startswith("qr/")]


def test_no_qr_image_by_default(services):
    service = services['qr_settings']
    assert service.get_qr_path() is None
    assert service.get_qr_url() is None

def test_set_qr_image(services, image_data_uri):
    service = services['qr_settings']
    url = service.set_qr_image(image_data_uri)

    path = services['kv_store'].get(QR_PATH_KEY)
    assert path.startswith("qr/qr-image-") and path.endswith(".png")
    assert url is not None and url.startswith("memory://")
    assert services['object_store'].get(path)[0] == b"\x89PNG-test-image"

def test_replacing_qr_image_keeps_one_object(services, image_data_uri):
    service = services['qr_settings']
    service.set_qr_image(image_data_uri)
    first = service.get_qr_path()

    second_uri = "data:image/png;base64," + base64.b64encode(b"second").decode()
    service.set_qr_image(second_uri)

    assert _qr_paths(services) == [service.get_qr_path()]
    assert service.get_qr_path() != first
    assert services['object_store'].get(service.get_qr_path())[0] == b"second"

def test_set_qr_image_requires_data(services):
    with pytest.raises(MissingFieldsError):
        services['qr_settings'].set_qr_image("")

def test_invalid_qr_payload_keeps_previous(services, image_data_uri):
    service = services['qr_settings']
    service.set_qr_image(image_data_uri)
    previous = service.get_qr_path()

    with pytest.raises(MediaDecodeError):
        service.set_qr_image("not-a-data-uri")

    assert service.get_qr_path() == previous
    assert _qr_paths(services) == [previous]

def test_delete_qr(services, image_data_uri):
    service = services['qr_settings']
    service.set_qr_image(image_data_uri)

    service.delete_qr()

    assert service.get_qr_path() is None
    assert service.get_qr_url() is None
    assert _qr_paths(services) == []

def test_delete_qr_without_image(services):
    services['qr_settings'].delete_qr()
    assert services['qr_settings'].get_qr_path() is None
