"""Services Layer — implementations of the core service contracts.

Invariants:
    - Each service satisfies a Protocol from core/service_protocols.py
    - Services raise IamError subclasses, never HTTP responses
"""
