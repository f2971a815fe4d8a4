"""Infrastructure Layer — database sessions, outbound HTTP clients and logging setup.

Invariants:
    - Infrastructure imports only core/errors from the domain side
    - Every outbound call has an explicit timeout and maps failures to a CashBusError
"""
