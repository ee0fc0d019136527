"""Prompting package.

Deterministic prompt composition and the JSON prompt-table loader. No model
invocation happens here.
"""
