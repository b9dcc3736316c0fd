# src/seo_auditor/services/source_service.py
import codecs
import logging
from pathlib import Path
from typing import IO, Union

logger = logging.getLogger(__name__)


def read_source_file(path: Union[str, Path], encoding: str = "utf-8") -> str:
    """
    Reads an HTML file as text.

    Raises:
        FileNotFoundError: If `path` does not exist.
    """
    src_path = Path(path)
    if not src_path.is_file():
        logger.error("%s : no such file", src_path)
        raise FileNotFoundError(f"{src_path} : no such file")

    with open(src_path, "r", encoding=encoding) as f:
        source = f.read()
    logger.debug("Read %d characters from %s", len(source), src_path)
    return source


def read_source_stream(stream: IO, encoding: str = "utf-8", chunk_size: int = 65536) -> str:
    """
    Collects all chunks of a readable text or binary stream into one string.

    Raises:
        ValueError: If the stream is not readable.
    """
    readable = getattr(stream, "readable", None)
    if stream is None or (callable(readable) and not readable()):
        raise ValueError("Source stream should be readable.")

    # Binary chunks may split a multi-byte character, so decode incrementally.
    decoder = codecs.getincrementaldecoder(encoding)()
    chunks = []
    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            break
        if isinstance(chunk, bytes):
            chunk = decoder.decode(chunk)
        chunks.append(chunk)
    source = "".join(chunks) + decoder.decode(b"", final=True)
    logger.debug("Read %d characters from stream in %d chunk(s)", len(source), len(chunks))
    return source
