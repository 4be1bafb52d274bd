"""
Conversation flows for the Telegram bot.

This package adapts Telegram updates to the chat-independent flows in
``conversations`` and ``forms``. Each conversation flow exposes the handlers
a bot registers for it.
"""
