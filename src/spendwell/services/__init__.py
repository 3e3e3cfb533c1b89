"""Ledger services: every balance-affecting operation lives here."""
