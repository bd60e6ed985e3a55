"""Routing — named regex rules dispatched in registration order.

Rules are registered as raw specs and built lazily, at most once per
name, when a dispatch or reverse lookup first needs them.
"""
