"""Relay Miniflux webhook events to a Hoarder bookmark API."""

__version__ = "0.1.0"
