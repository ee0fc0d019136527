"""Core orchestration package.

Composition:
    - `routing_types`: verdict, message, request and result contracts.
    - `errors`: failure taxonomy shared by every layer.
    - `engine`: dispatcher state machine.

Package import itself is side-effect free.
"""
