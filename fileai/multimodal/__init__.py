"""Content classification and payload preparation.

Scope:
- Decide text vs. image vs. unknown for a byte buffer and path.
- Read files and turn content into gateway payloads.
- No HTTP or model invocation.
"""
