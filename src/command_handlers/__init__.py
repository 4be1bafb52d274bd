"""
Command Handlers package.

This package contains individual command handlers for Telegram bot interactions:
- start_handler: Handles the /start command
- cancel_handler: Handles the /cancel command, aborting a registration in progress
- conversations/: Contains the registration conversation
"""
