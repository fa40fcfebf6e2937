"""Adaptive layout: container fill negotiation on a recomposing renderer."""
