"""LLM access package.

Module split:
    - `provider_config`: environment-driven configuration bundle.
    - `service`: content-kind -> request construction.
    - `client`: chat-completions HTTP transport and response decoding.
"""
