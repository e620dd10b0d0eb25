import io

import numpy as np
import pytest
from google.api_core import exceptions as gcp_exceptions
from PIL import Image

from mlgc_backend import create_app
from mlgc_backend.core.config import Config
from mlgc_backend.database import firestore_db
from mlgc_backend.ml.classification import model_loader


def make_image_bytes(fmt="JPEG", size=(224, 224), color=(0, 0, 0)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, format=fmt)
    return buf.getvalue()


class FakeModel:
    """Stand-in untuk model Keras: predict() selalu mengembalikan score tetap."""

    def __init__(self, score=0.2, error=None):
        self.score = score
        self.error = error
        self.batches = []

    def predict(self, batch, verbose=0):
        if self.error is not None:
            raise self.error
        self.batches.append(batch)
        return np.array([[self.score]], dtype=np.float32)


class FakeDocument:
    def __init__(self, collection, doc_id):
        self.collection = collection
        self.id = doc_id

    def set(self, data):
        if self.collection.error is not None:
            raise self.collection.error
        self.collection.docs[self.id] = dict(data)


class FakeCollection:
    def __init__(self, error=None):
        self.docs = {}
        self.error = error

    def document(self, doc_id):
        return FakeDocument(self, doc_id)


class FakeBlob:
    def __init__(self, name, data=b""):
        self.name = name
        self.data = data

    def download_to_filename(self, filename):
        if self.data is None:
            raise gcp_exceptions.NotFound(f"No such object: {self.name}")
        with open(filename, "wb") as f:
            f.write(self.data)


class FakeBucket:
    def __init__(self, objects=None, list_error=None):
        # objects: {name: bytes}
        self.objects = dict(objects or {})
        self.list_error = list_error
        self.downloaded = []

    def list_blobs(self, prefix=None):
        if self.list_error is not None:
            raise self.list_error
        return [FakeBlob(n, d) for n, d in self.objects.items() if n.startswith(prefix or "")]

    def blob(self, name):
        self.downloaded.append(name)
        return FakeBlob(name, self.objects.get(name))


class FakeGCSClient:
    def __init__(self, bucket):
        self._bucket = bucket
        self.bucket_names = []

    def bucket(self, name):
        self.bucket_names.append(name)
        return self._bucket


@pytest.fixture
def fake_model(monkeypatch):
    model = FakeModel(score=0.2)
    monkeypatch.setattr(model_loader, "_model", model)
    return model


@pytest.fixture
def fake_collection(monkeypatch):
    collection = FakeCollection()
    monkeypatch.setattr(firestore_db, "get_predictions_collection", lambda client=None: collection)
    return collection


@pytest.fixture
def app(monkeypatch, fake_model, fake_collection):
    monkeypatch.setattr(Config, "LOAD_MODEL_ON_STARTUP", False)
    app = create_app()
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
