"""Cancellation implementation parts (see ``taskmaster_providers.base.cancellation``)."""
