"""Services Layer: registry, ledger and orchestrator over injected host capabilities.

Invariants:
    - Services depend on core/ Protocols, never on concrete infrastructure
    - ScavengerLedger is the only entry point the API layer calls
"""
