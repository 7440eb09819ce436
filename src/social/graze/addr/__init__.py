"""
ADDR - Solana Address Resolver

This module implements a small gateway service that turns whatever a user typed into a wallet field
(a raw Solana address, a .sol name, a dotted domain or a wallet profile handle) into the canonical
Solana address it points at.

Key Components:
- app: Web application layer with the resolve handler, middlewares and configuration
- resolve: The resolution strategy chain and the models it produces

Resolution Overview:
1. Direct addresses are recognized locally and returned unchanged
2. .sol names are resolved through the name-service proxy
3. Other dotted domains are looked up in the domain-owner registry
4. Anything left is looked up as a wallet profile

Each request is resolved independently. Nothing is cached or persisted.
"""
