"""Infrastructure layer for the power estimator.

This package contains implementations of domain interfaces
that interact with external systems (model server, HTTP API).
"""
