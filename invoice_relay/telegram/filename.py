"""
Filename Encoding Repair.

Multipart parsers that assume Latin-1 turn a UTF-8 filename such as
"Счёт.pdf" into mojibake ("Ð¡Ñ\x87Ñ\x91Ñ\x82.pdf"). Re-encoding the string
as Latin-1 recovers the original bytes, which are then decoded as UTF-8.
"""


def fix_filename_encoding(filename: str) -> str:
    """
    Return the human-readable form of a possibly mis-decoded filename.

    Names that are already correct come back unchanged: either they hold
    characters outside Latin-1 (so they were decoded properly) or their
    Latin-1 bytes are not valid UTF-8.
    """
    try:
        raw = filename.encode("latin-1")
    except UnicodeEncodeError:
        return filename

    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return filename
