"""Receipt upload tests."""

import pytest

from refund_api.exceptions import NotFoundError, ValidationError
from refund_api.services.uploads import UploadStorage

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def upload(client, headers, name="receipt.png", content_type="image/png", data=PNG_BYTES):
    return client.post("/uploads", headers=headers, files={"file": (name, data, content_type)})


def test_upload_receipt(client, employee_headers, upload_storage):
    """Test that an upload returns a stored file name."""
    response = upload(client, employee_headers)
    assert response.status_code == 201
    filename = response.json()["filename"]
    assert filename.endswith("-receipt.png")
    assert (upload_storage.directory / filename).read_bytes() == PNG_BYTES


def test_upload_then_file_refund(client, employee_headers):
    """Test the upload-then-create flow."""
    filename = upload(client, employee_headers).json()["filename"]

    response = client.post(
        "/refunds",
        headers=employee_headers,
        json={
            "name": "Hotel",
            "amount": "320.00",
            "category": "accommodation",
            "filename": filename,
        },
    )
    assert response.status_code == 201
    assert response.json()["filename"] == filename


def test_upload_rejects_wrong_type(client, employee_headers):
    response = upload(client, employee_headers, name="notes.txt", content_type="text/plain")
    assert response.status_code == 400
    assert "Invalid file type" in response.json()["detail"]


def test_upload_rejects_large_file(client, employee_headers):
    response = upload(client, employee_headers, data=b"\x00" * (1024 * 1024 + 1))
    assert response.status_code == 400
    assert "too large" in response.json()["detail"]


def test_manager_cannot_upload(client, manager_headers):
    response = upload(client, manager_headers)
    assert response.status_code == 403


def test_download_receipt(client, employee_headers, manager_headers):
    filename = upload(client, employee_headers).json()["filename"]

    response = client.get(f"/uploads/{filename}", headers=manager_headers)
    assert response.status_code == 200
    assert response.content == PNG_BYTES


def test_download_missing_receipt(client, employee_headers):
    response = client.get("/uploads/missing.png", headers=employee_headers)
    assert response.status_code == 404


def test_deleting_refund_removes_receipt(client, employee_headers, upload_storage):
    filename = upload(client, employee_headers).json()["filename"]
    refund = client.post(
        "/refunds",
        headers=employee_headers,
        json={"name": "Hotel", "amount": 100, "category": "accommodation", "filename": filename},
    ).json()

    client.delete(f"/refunds/{refund['id']}", headers=employee_headers)
    assert not (upload_storage.directory / filename).exists()


def test_replacing_receipt_removes_old_file(client, employee_headers, upload_storage):
    old = upload(client, employee_headers).json()["filename"]
    new = upload(client, employee_headers).json()["filename"]
    refund = client.post(
        "/refunds",
        headers=employee_headers,
        json={"name": "Hotel", "amount": 100, "category": "accommodation", "filename": old},
    ).json()

    response = client.patch(
        f"/refunds/{refund['id']}", headers=employee_headers, json={"filename": new}
    )
    assert response.status_code == 200
    assert not (upload_storage.directory / old).exists()
    assert (upload_storage.directory / new).exists()


def test_storage_refuses_path_components(tmp_path):
    storage = UploadStorage(tmp_path, max_size_bytes=1024)
    (tmp_path.parent / "secret.png").write_bytes(b"x")

    with pytest.raises(NotFoundError):
        storage.path_for("../secret.png")


def test_storage_strips_client_directories(tmp_path):
    storage = UploadStorage(tmp_path, max_size_bytes=1024)
    filename = storage.save("../../etc/receipt.png", "image/png", b"data")

    assert "/" not in filename
    assert (tmp_path / filename).exists()


def test_storage_rejects_empty_file(tmp_path):
    storage = UploadStorage(tmp_path, max_size_bytes=1024)
    with pytest.raises(ValidationError):
        storage.save("receipt.png", "image/png", b"")


def test_shared_receipt_survives_deleting_one_refund(client, employee_headers, create_refund):
    """Test that a receipt stays while another refund still references it."""
    filename = upload(client, employee_headers).json()["filename"]
    first = create_refund(employee_headers, name="Lunch", filename=filename)
    create_refund(employee_headers, name="Dinner", filename=filename)

    response = client.delete(f"/refunds/{first['id']}", headers=employee_headers)
    assert response.status_code == 204

    response = client.get(f"/uploads/{filename}", headers=employee_headers)
    assert response.status_code == 200
    assert response.content == PNG_BYTES


def test_shared_receipt_survives_replacing_it_on_one_refund(
    client, employee_headers, create_refund, upload_storage
):
    shared = upload(client, employee_headers).json()["filename"]
    new = upload(client, employee_headers).json()["filename"]
    first = create_refund(employee_headers, name="Lunch", filename=shared)
    create_refund(employee_headers, name="Dinner", filename=shared)

    response = client.patch(
        f"/refunds/{first['id']}", headers=employee_headers, json={"filename": new}
    )
    assert response.status_code == 200
    assert (upload_storage.directory / shared).exists()


def test_owner_downloads_own_receipt(client, employee_headers, create_refund):
    filename = upload(client, employee_headers).json()["filename"]
    create_refund(employee_headers, filename=filename)

    response = client.get(f"/uploads/{filename}", headers=employee_headers)
    assert response.status_code == 200


def test_other_employee_cannot_download_receipt(
    client, employee_headers, other_employee_headers, create_refund
):
    """Test that employees only read receipts attached to their own refunds."""
    filename = upload(client, employee_headers).json()["filename"]
    create_refund(employee_headers, filename=filename)

    response = client.get(f"/uploads/{filename}", headers=other_employee_headers)
    assert response.status_code == 403


def test_unreferenced_receipt_is_hidden_from_employees(client, employee_headers):
    filename = upload(client, employee_headers).json()["filename"]

    response = client.get(f"/uploads/{filename}", headers=employee_headers)
    assert response.status_code == 404
