from .client import ClientFactory

__all__ = ["ClientFactory"]
