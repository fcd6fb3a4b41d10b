"""Rewrite relative image URLs to absolute storage URLs"""

from mdpress.core.nodes import Image, Root, walk
from mdpress.core.storage import ImageResolver, is_absolute_url


def rewrite_image_urls(tree: Root, resolve: ImageResolver) -> Root:
    """Point every non-absolute image at resolve(url). Absolute URLs are left alone, so reruns are no-ops.

    Resolver errors (e.g. StorageConfigError) propagate to the caller.
    """
    for node, _, _ in walk(tree):
        if isinstance(node, Image) and not is_absolute_url(node.url):
            node.url = resolve(node.url)
    return tree
