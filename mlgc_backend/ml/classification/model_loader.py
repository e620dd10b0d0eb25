# mlgc_backend/ml/classification/model_loader.py
import json
import logging
import os
import posixpath
import threading

from google.api_core import exceptions as gcp_exceptions
from google.cloud import storage

from mlgc_backend.core.config import Config
from mlgc_backend.core.errors import ModelNotFoundError, UpstreamError

logger = logging.getLogger(__name__)

_model = None
_model_lock = threading.Lock()

_gcs_client = None


def get_gcs_client():
    global _gcs_client
    if _gcs_client is None:
        _gcs_client = storage.Client()
    return _gcs_client


def find_manifest_blob(blobs, manifest_name: str):
    """
    Ambil blob pertama yang namanya berakhiran manifest_name (mis. "model.json").
    """
    for blob in blobs:
        if blob.name.endswith(manifest_name):
            return blob
    return None


def read_shard_paths(manifest_path: str) -> list[str]:
    """
    Baca daftar file weight shard dari model.json (format TF.js Layers):
      {"modelTopology": ..., "weightsManifest": [{"paths": [...], "weights": [...]}]}
    """
    with open(manifest_path, "r", encoding="utf-8") as f:
        manifest = json.load(f)

    if not isinstance(manifest, dict):
        raise UpstreamError(f"invalid model manifest: {manifest_path}")

    groups = manifest.get("weightsManifest") or []
    if not isinstance(groups, list):
        raise UpstreamError(f"invalid model manifest: {manifest_path}")

    paths = []
    for group in groups:
        if not isinstance(group, dict):
            raise UpstreamError(f"invalid model manifest: {manifest_path}")
        group_paths = group.get("paths") or []
        if not isinstance(group_paths, list) or not all(isinstance(p, str) for p in group_paths):
            raise UpstreamError(f"invalid model manifest: {manifest_path}")
        paths.extend(group_paths)
    return paths


def _safe_local_path(local_dir: str, rel_path: str) -> str:
    base = os.path.abspath(local_dir)
    dst = os.path.normpath(os.path.join(base, rel_path))
    # guard anti path traversal dari isi manifest
    if not dst.startswith(base + os.sep):
        raise UpstreamError(f"shard path escapes model dir: {rel_path}")
    return dst


def download_model_artifacts(client=None, local_dir: str | None = None) -> str:
    """
    - list object di bucket dengan prefix model/
    - cari manifest model.json
    - download manifest + semua shard yang direferensikan ke local_dir
    return: path lokal model.json
    """
    client = client or get_gcs_client()
    local_dir = local_dir or Config.MODEL_LOCAL_DIR

    try:
        bucket = client.bucket(Config.MODEL_BUCKET_NAME)
        blobs = list(bucket.list_blobs(prefix=Config.MODEL_PREFIX))
    except gcp_exceptions.GoogleAPIError as e:
        raise UpstreamError(f"cannot list model bucket: {e}") from e

    manifest_blob = find_manifest_blob(blobs, Config.MODEL_MANIFEST_NAME)
    if manifest_blob is None:
        raise ModelNotFoundError("Model not found in bucket")

    os.makedirs(local_dir, exist_ok=True)
    local_manifest = os.path.join(local_dir, Config.MODEL_MANIFEST_NAME)

    # Shard dicari relatif terhadap folder manifest di bucket
    remote_dir = posixpath.dirname(manifest_blob.name)

    try:
        logger.info("[model_loader] downloading gs://%s/%s", Config.MODEL_BUCKET_NAME, manifest_blob.name)
        manifest_blob.download_to_filename(local_manifest)

        shard_paths = read_shard_paths(local_manifest)
        for rel in shard_paths:
            dst = _safe_local_path(local_dir, rel)
            os.makedirs(os.path.dirname(dst), exist_ok=True)
            bucket.blob(posixpath.join(remote_dir, rel)).download_to_filename(dst)
    except (gcp_exceptions.GoogleAPIError, ValueError) as e:
        raise UpstreamError(f"cannot download model artifacts: {e}") from e

    logger.info("[model_loader] downloaded manifest + %d shard(s) to %s", len(shard_paths), local_dir)
    return local_manifest


def load_layers_model(manifest_path: str):
    """
    Bangun model Keras dari model.json (TF.js Layers) + shard di folder yang sama.
    """
    # Import di sini supaya tensorflow hanya di-load saat model benar-benar dibangun
    from tensorflowjs.converters import load_keras_model

    return load_keras_model(manifest_path)


def init_model(force: bool = False):
    """
    Load 1x model global dan cache di memory.
    Dipanggil saat startup (create_app); aman dipanggil dari banyak thread.
    """
    global _model
    with _model_lock:
        if _model is not None and not force:
            return _model

        logger.info("[model_loader] loading model from bucket %s", Config.MODEL_BUCKET_NAME)
        manifest_path = download_model_artifacts()
        try:
            model = load_layers_model(manifest_path)
        except (OSError, ValueError, KeyError) as e:
            raise UpstreamError(f"cannot build model from {manifest_path}: {e}") from e

        _model = model
        logger.info("[model_loader] model ready")
        return _model


def get_classification_model():
    """
    Model yang sudah di-load. Kalau belum (LOAD_MODEL_ON_STARTUP=0),
    load sekali di sini.
    """
    if _model is None:
        return init_model()
    return _model


def is_model_loaded() -> bool:
    return _model is not None
