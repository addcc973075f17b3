from __future__ import annotations

import logging
from pathlib import Path

from rdflib import Graph

"""RDF file service: supported formats, reading and writing graphs.

Format names are the user facing keys (case-insensitive on input). Each maps
to an rdflib serializer name and a default file extension.
"""

__all__ = [
    "DEFAULT_FORMAT",
    "RDF_FORMATS",
    "RDF_EXTENSIONS",
    "SerializationError",
    "UnsupportedFormatError",
    "normalize_format",
    "output_path_for",
    "format_for_path",
    "write_graph",
    "read_graph",
]

logger = logging.getLogger(__name__)

DEFAULT_FORMAT = "TTL"

# format name -> rdflib serializer
RDF_FORMATS: dict[str, str] = {
    "TTL": "turtle",
    "RDF/XML": "xml",
    "NTRIPLES": "nt",
    "JSON-LD": "json-ld",
}

# format name -> default file extension
RDF_EXTENSIONS: dict[str, str] = {
    "TTL": "ttl",
    "RDF/XML": "rdf",
    "NTRIPLES": "nt",
    "JSON-LD": "jsonld",
}


class SerializationError(Exception):
    """Raised when a graph cannot be written to or read from a file."""


class UnsupportedFormatError(ValueError):
    """Raised for output format names outside RDF_FORMATS."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(
            f"unsupported output format '{value}', use one of: {', '.join(RDF_FORMATS)}"
        )


def normalize_format(name: str | None) -> str:
    """Canonical format name ("ttl" -> "TTL"); None -> DEFAULT_FORMAT."""
    if name is None:
        return DEFAULT_FORMAT
    key = name.strip().upper()
    if key not in RDF_FORMATS:
        raise UnsupportedFormatError(name)
    return key


def output_path_for(input_path: Path, out_file: str | None, fmt: str) -> Path:
    """Output path for a run.

    Default is "<input stem>_out.<ext>" next to the input; an explicit path
    without the format extension gets it appended.
    """
    ext = RDF_EXTENSIONS[fmt]
    if out_file is None:
        return input_path.with_name(f"{input_path.stem}_out.{ext}")
    out = Path(out_file)
    if not out.name.lower().endswith(f".{ext}"):
        out = out.with_name(f"{out.name}.{ext}")
    return out


def write_graph(graph: Graph, path: Path, fmt: str) -> Path:
    """Serialize graph to path in the given format, overwriting the file."""
    fmt = normalize_format(fmt)
    logger.info("Writing data to RDF file '%s' using format '%s'", path, fmt)
    try:
        graph.serialize(destination=str(path), format=RDF_FORMATS[fmt], encoding="utf-8")
    except OSError as e:
        raise SerializationError(f"could not write output file {path}: {e}") from e
    return path


def format_for_path(path: Path) -> str | None:
    """Format name matching a file extension, None if unknown."""
    suffix = path.suffix.lstrip(".").lower()
    for name, ext in RDF_EXTENSIONS.items():
        if ext == suffix:
            return name
    return None


def read_graph(path: Path) -> Graph:
    """Parse an RDF file; the format is taken from its extension."""
    fmt = format_for_path(path)
    if fmt is None:
        raise SerializationError(f"cannot guess RDF format of {path}")
    g = Graph()
    try:
        g.parse(str(path), format=RDF_FORMATS[fmt])
    except OSError as e:
        raise SerializationError(f"could not read input file {path}: {e}") from e
    except Exception as e:  # rdflib parser errors have no common base class
        raise SerializationError(f"could not parse {path} as {fmt}: {e}") from e
    return g
