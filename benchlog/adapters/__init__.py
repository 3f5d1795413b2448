"""
Adapters Package

Inbound (CLI) and outbound (persistence, export, visualization) adapters.
"""
