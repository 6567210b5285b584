"""Command line interface for ledgerdesk."""
