"""Adapters implementing the phonesync domain ports."""
