from storefront.models.account import Account

__all__ = ["Account"]
