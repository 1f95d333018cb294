from .base import ClientError, FeedClient
from .miniflux import MinifluxClient

__all__ = ["ClientError", "FeedClient", "MinifluxClient"]
