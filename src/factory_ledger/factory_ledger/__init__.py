"""Factory Ledger package.

Feature modules (users, organization, ledger, reports, ...) each carry their own
model / repository / service layers, with a thin Flask controller on top.
"""
