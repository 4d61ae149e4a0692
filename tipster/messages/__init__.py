"""Message catalog."""

from tipster.messages.catalog import MessageCatalog

__all__ = ["MessageCatalog"]
