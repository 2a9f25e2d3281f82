from .telegram import TelegramClient, PublishError, format_message

__all__ = ["TelegramClient", "PublishError", "format_message"]
