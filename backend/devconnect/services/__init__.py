"""Services Layer: the imperative shell around core/ policies.

Invariants:
    - Each operation: load aggregate → apply core policy → persist whole aggregate
    - Services raise DevConnectError subclasses; routes translate nothing
"""
