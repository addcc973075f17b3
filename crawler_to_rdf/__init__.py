"""Crawler-to-RDF: lab logbook spreadsheets -> RDF graphs."""

__version__ = "0.3.0"
