"""
Inbound Adapters

Entry points that drive the application.
"""
