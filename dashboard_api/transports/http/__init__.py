from .client import MESSAGES_PATH, FeedFetchError, SensorFeedClient

__all__ = ["MESSAGES_PATH", "FeedFetchError", "SensorFeedClient"]
