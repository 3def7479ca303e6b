WHITESPACE = frozenset(" \t\n\r")


def tokenize(text: str) -> tuple[str, ...]:
    """Split ``text`` on space/tab/newline/carriage-return, keeping casing.

    Only those four characters separate words; any other character
    (including other Unicode whitespace) is part of a token.
    """
    words: list[str] = []
    current: list[str] = []
    for char in text:
        if char in WHITESPACE:
            if current:
                words.append("".join(current))
                current = []
        else:
            current.append(char)
    if current:
        words.append("".join(current))
    return tuple(words)
