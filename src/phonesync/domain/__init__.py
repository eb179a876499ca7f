"""Core reconciliation domain for WhatsApp phone-number syncing."""
