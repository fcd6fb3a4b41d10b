"""Public object-storage URLs for images referenced by relative path"""

from typing import Callable, Optional

from mdpress.config import Settings, load_config


ImageResolver = Callable[[str], str]

STORAGE_PATH = "storage/v1/object/public"


class StorageConfigError(RuntimeError):
    """Image storage is not configured; rendering would emit broken URLs."""


def is_absolute_url(url: str) -> bool:
    return url.startswith('http://') or url.startswith('https://')


def storage_url(path: str, base_url: Optional[str], bucket: str) -> str:
    """Return the public URL of path inside bucket; absolute URLs pass through unchanged."""
    if is_absolute_url(path):
        return path
    if not base_url:
        raise StorageConfigError("storage_url is not configured (set MDPRESS_STORAGE_URL)")
    return f"{base_url.rstrip('/')}/{STORAGE_PATH}/{bucket}/{path.lstrip('/')}"


def make_storage_resolver(settings: Optional[Settings] = None) -> ImageResolver:
    """Return a path -> URL resolver bound to settings (loaded lazily on first use if omitted)."""
    loaded: list[Settings] = [settings] if settings else []

    def resolve(path: str) -> str:
        if not loaded:
            loaded.append(load_config())
        s = loaded[0]
        return storage_url(path, s.storage_url, s.storage_bucket)

    return resolve
