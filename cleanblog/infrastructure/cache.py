"""
Infrastructure Layer - Redis article cache.

Articles are stored as JSON under ``article:{id}``; lists under the key the
caller chooses. A missing key is a miss (``None``); connection and
decoding failures propagate so the use case can decide how to degrade.
"""

from datetime import timedelta
from typing import List, Optional
import json
import logging

from redis.asyncio import Redis

from ..application.ports import ArticleCacheRepository
from ..domain.entities import Article


logger = logging.getLogger(__name__)


def article_key(article_id: int) -> str:
    return f"article:{article_id}"


class RedisArticleCacheRepository(ArticleCacheRepository):
    """Redis implementation of ArticleCacheRepository."""

    def __init__(self, client: Redis):
        self.client = client

    async def get_article(self, article_id: int) -> Optional[Article]:
        raw = await self.client.get(article_key(article_id))
        if raw is None:
            return None
        return Article.from_dict(json.loads(raw))

    async def set_article(self, article: Article, expiration: timedelta) -> None:
        await self.client.set(
            article_key(article.id),
            json.dumps(article.to_dict()),
            ex=self._seconds(expiration),
        )

    async def get_articles(self, key: str) -> Optional[List[Article]]:
        raw = await self.client.get(key)
        if raw is None:
            return None
        return [Article.from_dict(item) for item in json.loads(raw)]

    async def set_articles(self, key: str, articles: List[Article], expiration: timedelta) -> None:
        payload = json.dumps([article.to_dict() for article in articles])
        await self.client.set(key, payload, ex=self._seconds(expiration))

    async def delete_article(self, article_id: int) -> None:
        """Evict one article. Deleting an absent key succeeds."""
        await self.client.delete(article_key(article_id))
        logger.debug(f"Evicted {article_key(article_id)}")

    @staticmethod
    def _seconds(expiration: timedelta) -> int:
        # SET EX rejects zero, keep at least one second
        return max(1, int(expiration.total_seconds()))


def create_redis_client(url: str) -> Redis:
    """Create a client from a ``redis://`` URL; connections open lazily."""
    return Redis.from_url(url, decode_responses=True)
