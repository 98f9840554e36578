"""Domain layer for the linear-regression power estimator.

This package contains the core business logic: model weights, feature
schemas, sample batches and the linear prediction math, following
Domain-Driven Design (DDD) principles.

The domain layer is pure Python plus numpy, with no dependency on Flask,
HTTP clients or any other infrastructure concern.
"""
