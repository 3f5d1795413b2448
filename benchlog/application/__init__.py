"""
Application Layer

Ports (interfaces to the outside world) and the services that orchestrate
domain operations through them.
"""
