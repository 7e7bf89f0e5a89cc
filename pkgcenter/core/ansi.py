from typing import Final

_ESC: Final[str] = "\x1b"
_BEL: Final[str] = "\x07"
_CSI_INTRODUCER: Final[str] = "["
_OSC_INTRODUCER: Final[str] = "]"
_STRING_TERMINATOR: Final[str] = "\\"


def _skip_csi(text: str, start: int) -> int:
    """Returns the index right after a CSI sequence body starting at `start`.

    The sequence ends with the first final byte in the range `@`..`~`.
    """
    i = start
    end = len(text)
    while i < end:
        ch = text[i]
        i += 1
        if "@" <= ch <= "~":
            break
    return i


def _skip_osc(text: str, start: int) -> int:
    """Returns the index right after an OSC sequence body starting at `start`.

    The sequence ends with BEL or with the string terminator `ESC \\`.
    """
    i = start
    end = len(text)
    while i < end:
        ch = text[i]
        if ch == _BEL:
            return i + 1
        if ch == _ESC and i + 1 < end and text[i + 1] == _STRING_TERMINATOR:
            return i + 2
        i += 1
    return i


def strip_control_sequences(text: str) -> str:
    """Removes ANSI CSI and OSC escape sequences from terminal output.

    Color codes (`ESC [ 31 m`), cursor moves and OSC 8 hyperlinks
    (`ESC ] 8 ;; url BEL`) are dropped together with their payload. An unterminated
    sequence swallows the rest of the input. Any other escape byte is dropped on its
    own and the character after it is kept.

    Args:
        text: Decoded process output.

    Returns:
        Plain text. Applying the function again returns the same text.
    """
    if _ESC not in text:
        return text

    out: list[str] = []
    i = 0
    end = len(text)
    while i < end:
        ch = text[i]
        if ch != _ESC:
            out.append(ch)
            i += 1
            continue

        if i + 1 >= end:
            # Lone ESC at the very end.
            i += 1
            continue

        nxt = text[i + 1]
        if nxt == _CSI_INTRODUCER:
            i = _skip_csi(text, i + 2)
        elif nxt == _OSC_INTRODUCER:
            i = _skip_osc(text, i + 2)
        else:
            i += 1
    return "".join(out)
