from .service import SessionBootstrap

__all__ = ["SessionBootstrap"]
