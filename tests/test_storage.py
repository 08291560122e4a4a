import pytest
from django.core.files.uploadedfile import SimpleUploadedFile

from procurement.services import storage, supabase_client


class DummyBucket:
    def __init__(self, name, uploads):
        self.name = name
        self.uploads = uploads

    def upload(self, path, data, options):
        self.uploads.append((self.name, path, data, options))
        return {"Key": path}

    def get_public_url(self, path):
        return f"https://cdn.test/{self.name}/{path}"


class DummyStorage:
    def __init__(self):
        self.uploads = []

    def from_(self, bucket):
        return DummyBucket(bucket, self.uploads)


class DummyClient:
    def __init__(self):
        self.storage = DummyStorage()


def test_upload_to_supabase_bucket(monkeypatch):
    client = DummyClient()
    monkeypatch.setattr(storage, "get_supabase_client", lambda: client)
    upload = SimpleUploadedFile("bill.png", b"png-bytes", content_type="image/png")
    url = storage.upload_file("store_in_images", upload, "bill-1.png")
    assert url == "https://cdn.test/store_in_images/bill-1.png"
    assert client.storage.uploads == [
        ("store_in_images", "bill-1.png", b"png-bytes", {"content-type": "image/png"})
    ]


def test_upload_bytes_guesses_content_type(monkeypatch):
    client = DummyClient()
    monkeypatch.setattr(storage, "get_supabase_client", lambda: client)
    storage.upload_file("po_image", b"%PDF", "PO-1.pdf")
    assert client.storage.uploads[0][3] == {"content-type": "application/pdf"}


def test_upload_error_raises_storage_error(monkeypatch):
    class FailingBucket(DummyBucket):
        def upload(self, path, data, options):
            raise RuntimeError("403")

    client = DummyClient()
    client.storage.from_ = lambda bucket: FailingBucket(bucket, [])
    monkeypatch.setattr(storage, "get_supabase_client", lambda: client)
    with pytest.raises(storage.StorageError):
        storage.upload_file("po_image", b"x", "a.pdf")


def test_local_fallback(settings):
    url = storage.upload_file("comparison_sheet", b"data", "sheet.xlsx")
    assert "comparison_sheet/sheet" in url


def test_timestamped_name(monkeypatch):
    monkeypatch.setattr(storage, "epoch_ms", lambda: 1700000000000)
    assert storage.timestamped_name("PO-STORE-PO-25-26-3/1", "pdf", sep="-") == (
        "PO-STORE-PO-25-26-3-1-1700000000000.pdf"
    )
    assert storage.timestamped_name("SI 0001", "jpg") == "SI_0001_1700000000000.jpg"


def test_extension_of():
    assert storage.extension_of(SimpleUploadedFile("A.PDF", b"")) == "pdf"
    assert storage.extension_of(b"raw") == "bin"


def test_client_not_configured_without_credentials(monkeypatch, settings):
    monkeypatch.delenv("SUPABASE_URL", raising=False)
    monkeypatch.delenv("SUPABASE_KEY", raising=False)
    settings.SUPABASE_URL = ""
    settings.SUPABASE_KEY = ""
    supabase_client.reset_client()
    assert supabase_client.get_supabase_client() is None


def test_client_created_from_environment(monkeypatch):
    monkeypatch.setenv("SUPABASE_URL", "https://project.supabase.co")
    monkeypatch.setenv("SUPABASE_KEY", "key")
    created = []

    def fake_create(url, key):
        created.append((url, key))
        return DummyClient()

    monkeypatch.setattr(supabase_client, "create_client", fake_create)
    supabase_client.reset_client()
    try:
        first = supabase_client.get_supabase_client()
        assert supabase_client.get_supabase_client() is first
        assert created == [("https://project.supabase.co", "key")]
    finally:
        supabase_client.reset_client()
