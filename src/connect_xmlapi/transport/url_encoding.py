"""Form-style URL encoding of query values.

The service expects the legacy form encoding: space becomes ``+``, ASCII
letters, digits and ``!'()*-._`` pass through, and every other byte of the
UTF-8 representation becomes ``%xx`` with lower-case hex digits.
"""

import string

_SAFE = frozenset((string.ascii_letters + string.digits + "!'()*-._").encode("ascii"))


def url_encode(value: str) -> str:
    """Percent-encode a query value over its UTF-8 bytes.

    Example:
        >>> url_encode("Team Sync / Q&A")
        'Team+Sync+%2f+Q%26A'
        >>> url_encode("café")
        'caf%c3%a9'
    """
    out = []
    for byte in value.encode("utf-8"):
        if byte in _SAFE:
            out.append(chr(byte))
        elif byte == 0x20:
            out.append("+")
        else:
            out.append(f"%{byte:02x}")
    return "".join(out)


def url_encode_unicode(value: str) -> str:
    """Encode non-ASCII characters with the legacy ``%uXXXX`` escape.

    ASCII characters follow the same rules as url_encode.

    Example:
        >>> url_encode_unicode("café")
        'caf%u00e9'
    """
    out = []
    for char in value:
        code = ord(char)
        if code < 0x80:
            out.append(url_encode(char))
        elif code <= 0xFFFF:
            out.append(f"%u{code:04x}")
        else:
            # Outside the BMP: escape as a UTF-16 surrogate pair
            code -= 0x10000
            out.append(f"%u{0xD800 + (code >> 10):04x}%u{0xDC00 + (code & 0x3FF):04x}")
    return "".join(out)
