"""
Address Resolution

This package resolves user supplied identifiers to canonical Solana addresses by walking an ordered
chain of strategies, stopping at the first one that produces an address.

Key Components:
- model.py: Source tags, strategy outcomes and the response models
- exceptions.py: Validation and resolution exceptions
- strategy.py: Address validation and the individual resolution strategies
- address.py: The AddressResolver driver and the default strategy chain
- __main__.py: CLI interface for resolution

Strategy Order:
1. Direct: the identifier already is a well-formed address
2. Name-service: the identifier ends with .sol
3. Domain registry: the identifier contains a dot; declines softly when the registry has no owner
4. Wallet profile: unconditional last resort

A fault in any network-backed strategy ends the resolution. The only recovery is the domain
registry declining, which hands the identifier on to the wallet profile lookup.
"""
