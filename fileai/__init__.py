"""fileai: classify a file's content and summarize or describe it via a chat-completions API.

Package split:
    - `core`: data contracts, error taxonomy and the dispatch engine.
    - `multimodal`: content classification, file reading and payload preparation.
    - `prompting`: prompt composition and prompt-file loading.
    - `llm`: configuration, request construction and gateway transport.
    - `api`: command-line adapter.
"""

__version__ = "0.1.0"
