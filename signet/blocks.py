"""
Signet block extractor.

A signature body is a sequence of brace-delimited blocks:

    {name=help : The command name}
    {install : Install a package | {--force : Force it}}

blocks(text) yields the inner content of each top-level block, left to right.
A block may hold one level of nested blocks, which stay in the yielded text
verbatim so the descriptor parser can recurse into them.

Leniency
- A block's content must start with a non-brace character ("{}" and "{{a}}"
  are not blocks at their first brace).
- A candidate that never closes, or nests deeper than one level, is skipped;
  the scan resumes right after its opening brace, so an inner well-formed
  block can still be found.
- Nothing is ever raised for malformed text.
"""

OPEN = "{"
CLOSE = "}"


def _closing(text, start, /):
    """
    Return the index of the brace closing the block opened at `start`, or -1.
    """
    if start + 1 >= len(text) or text[start + 1] in (OPEN, CLOSE):
        return -1

    depth = 0
    for index in range(start, len(text)):
        if (char := text[index]) == OPEN:
            depth += 1
            # The block itself plus one nested level.
            if depth > 2:
                return -1
        elif char == CLOSE:
            depth -= 1
            if not depth:
                return index
    return -1


def spans(text, /):
    """
    Yield (start, end) index pairs of every top-level block, braces included.
    """
    if not isinstance(text, str):
        raise TypeError("spans() argument must be a string")

    index = 0
    while (start := text.find(OPEN, index)) != -1:
        if (end := _closing(text, start)) == -1:
            index = start + 1
            continue
        yield start, end + 1
        index = end + 1


def blocks(text, /):
    """
    Yield the inner content of every top-level block of `text`.

    Examples
    - blocks("{a : b} {c}")         -> "a : b", "c"
    - blocks("{a | {b} {c}} tail")  -> "a | {b} {c}"
    - blocks("{a {b {c}}}")         -> "b {c}"
    """
    for start, end in spans(text):
        yield text[start + 1:end - 1]


__all__ = (
    "spans",
    "blocks",
)
