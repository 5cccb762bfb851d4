"""
Infrastructure layer - settings, logging, and error types.

This layer contains the technical concerns shared by the domain, runtime
and CLI layers. It has no scheduling logic of its own.
"""
