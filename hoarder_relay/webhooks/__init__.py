"""Webhook inbound path for Miniflux.

Each delivery is signature-verified, decoded by its event-type header and
turned into bookmark calls synchronously within the request.
"""
