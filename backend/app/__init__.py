"""CashBus API Package — admin, SIRI proxy and incident verification endpoints.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
