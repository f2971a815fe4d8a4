"""Services Layer — payouts, settings, withdrawals, notifications and incident verification.

Invariants:
    - Services take an AsyncSession and own their commits
    - Domain failures raised as CashBusError subclasses, never returned as dicts

Design Decisions:
    - One service per resource; routes only shape requests and responses
"""
