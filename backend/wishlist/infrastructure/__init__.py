"""
Infrastructure Layer

Concrete document store adapters implementing the domain repository
contract.
"""
