from .redis_basket_store import RedisBasketStore

__all__ = ["RedisBasketStore"]
