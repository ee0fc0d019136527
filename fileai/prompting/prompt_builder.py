"""Prompt composition helpers.

Deterministic string assembly only: no I/O, no model calls, no global state.

Ordering guarantee:
    `compose_prompt` always emits the instruction first, then a blank line,
    then the raw input, so prompt+input callers and conversation callers send
    the same request shape.
"""

# Separator between the instruction and the raw input.
PROMPT_SEPARATOR = "\n\n"

_TOKEN_MARKERS = (" ", ".", ",", ";", ":")


def compose_prompt(prompt: str, raw_input: str) -> str:
    """Join an instruction and its input with a blank line.

    Edge cases:
        An empty `prompt` returns `raw_input` unchanged.
    """
    if not prompt:
        return raw_input
    return f"{prompt}{PROMPT_SEPARATOR}{raw_input}"


def estimate_tokens(text: str) -> int:
    """Rough token count: one per space or punctuation mark, plus one.

    Used only as an upper bound check before sending text; it is not a
    tokenizer and undercounts dense text.
    """
    return sum(text.count(marker) for marker in _TOKEN_MARKERS) + 1
